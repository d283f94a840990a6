# Routes package init
"""
User API — API Routes Package
==============================

Route Inventory:
    - users.py:  GET    /user/{id}   (fetch one user)
                 POST   /user        (create a user)
                 DELETE /user/{id}   (delete one user)

Design Principle:
    Routes are THIN — extract the path parameter or body, call UserService,
    return the result. Anything else belongs in the service.
"""
