"""
Shared, cross-cutting code for the admin app.

`core/` holds small building blocks that several features use (DB pool,
object storage client). Feature-specific SQL and business logic stays in the
corresponding feature package (e.g. `dashboard/`).
"""
