"""
repositories/ - Data Access Layer
==================================
SQL for the `fotadevicelogs` table. Repositories receive domain model
objects and turn them into parameterized statements.
"""
