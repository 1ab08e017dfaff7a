"""
Command Line Interface Package

Command Structure:
- moneyboard: Main entry point with utility commands (version, config)
- moneyboard transactions: list, add and delete transactions
- moneyboard reports: summary, monthly, categories, export and dashboard

Credentials come from --email/--password (or MONEYBOARD_EMAIL and
MONEYBOARD_PASSWORD); a pre-issued MONEYBOARD_API_TOKEN skips the login.
"""
