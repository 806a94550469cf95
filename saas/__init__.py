"""Simple SaaS demo: accounts, sessions and a personal item list."""
