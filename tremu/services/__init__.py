# Services package init
"""
Tremu Backend — Services Layer
================================

What:  Business rules between routes (HTTP) and the database (persistence).
How:   Each service is a stateless singleton whose methods take the request's
       AsyncSession and the authenticated user id, check board access, apply
       the change, and return a response schema.

Service Inventory:
    - access:         Board/column/task lookup and owner/member checks
    - AuthService:    Registration, login, current user
    - BoardService:   Boards, memberships, invitations
    - ColumnService:  Columns and column ordering per board
    - TaskService:    Tasks, assignment, task ordering per column
"""
