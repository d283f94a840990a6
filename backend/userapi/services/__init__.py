# Services package init
"""
User API — Services Layer
==========================

What:  Controller logic sitting between routes (HTTP) and the document store.
Why:   Routes handle HTTP; services decide what a request means for the data.

Service Inventory:
    - UserService: fetch, create and delete users
"""
