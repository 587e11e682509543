# Services package init
"""
SpacingCard — Services Layer
==============================

What:  Data access layer sitting between routes (HTTP) and the database.
How:   Services receive the request's AsyncSession explicitly on every call.

Service Inventory:
    - SpacingService: get_spacing, patch_spacing, post_spacing, list_examples
"""
