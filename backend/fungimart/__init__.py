"""
FungiMart Backend
=================

This is the Python package for the backend API.

HOW IT'S ORGANIZED:
------------------
- models/    = Data structures (what does a listing look like?)
- services/  = Workers (call weather APIs, store listings, check tokens)
- routers/   = API endpoints (the doors into our app)
- config.py  = Settings, read once from the environment
- errors.py  = Errors that become {"error": "..."} responses
- main.py    = Puts it all together and starts the server
"""

__version__ = "1.0.0"
