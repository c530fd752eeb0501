"""
API module - HTTP layer.

- main.py         : Application factory, middleware, exception handlers
- container.py    : Long-lived service objects owned by the app
- dependencies.py : Container access, admin auth and rate limiting
- routes/         : Endpoint definitions
"""
