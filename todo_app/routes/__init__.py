"""
Route blueprints for the todo API.

- tasks: task list/create/delete plus the health check, mounted at ``/``
- users: signup, login/signin and logout, mounted at ``/user``
"""
