"""Identity domain: accounts, roles and the shared error model."""
