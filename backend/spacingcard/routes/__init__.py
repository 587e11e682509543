# Routes package init
"""
SpacingCard — API Routes Package
==================================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - spacing.py:   GET   /spacing/{component_id}   (read one record)
                    PATCH /spacing/{component_id}   (update any subset of sides)
                    POST  /spacing                  (create a default record)
    - examples.py:  GET   /examples                 (raw example_table rows)
    - health.py:    GET   /health                   (service health check)

Routes stay thin: extract path/body data, call the service, return the model.
Error formatting lives in the global exception handlers.
"""
