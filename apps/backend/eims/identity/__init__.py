"""Identity: users, passwords, JWT auth gate and role permissions."""
