"""
HTTP routers for the task list API.

Routers stay thin: they validate bodies with the schemas in taskapi.schemas
and call the TaskRepository found on app.state.
"""
