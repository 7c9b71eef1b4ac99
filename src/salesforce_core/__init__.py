"""Salesforce API authentication for Python."""
