"""
High-level use cases for the Simple SaaS app.

Each service module orchestrates the pure domain updates and the store adapter
(register, login, add item, ...). Routers call these services instead of
manipulating the store directly.
"""
