# Routes package init
"""
Tremu Backend — API Routes Package
====================================

Route Inventory:
    - auth.py:     POST /api/auth/register, POST /api/auth/login
    - users.py:    GET  /api/user/me
    - boards.py:   /api/boards, /api/boards/{id}, /api/boards/{id}/invite
    - columns.py:  /api/boards/{id}/columns, /api/columns/{id}[/reorder]
    - tasks.py:    /api/columns/{id}/tasks, /api/tasks/{id}[/assign|/move]
    - health.py:   GET  /health

Routes stay thin: authenticate, call a service, wrap the result in the
``{message, data}`` envelope. Authorization and ordering live in services.
"""
