"""
GitHub Profile Analyzer

Fetches a GitHub user's public profile, asks Gemini for a developer
personality assessment and prints the parsed report.
"""

__version__ = "0.1.0"
