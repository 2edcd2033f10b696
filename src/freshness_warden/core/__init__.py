"""Configuration, logging and database plumbing shared by the service layer and the CLI."""
