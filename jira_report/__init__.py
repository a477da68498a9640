"""Jira report tool — aggregate your Jira searches into a static HTML report."""

__version__ = "0.1.0"
