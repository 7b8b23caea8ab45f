"""
repositories/ - Data Access Layer
==================================
Each repository encapsulates all SQL queries for a specific domain entity.
Repositories build parameterized statements from filter objects, receive raw
rows from the database, and return domain model objects.
"""
