"""Pure data records and update functions (accounts, items, editor state)."""
