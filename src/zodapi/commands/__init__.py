"""Built-in CLI sub-commands for zodapi.

* :mod:`~zodapi.commands.generate` -- ``import-openapi``: generate the
  ``endpoints.ts`` module from an OpenAPI/Swagger document.

Each module exports a plain callback function registered directly on the
root app in :mod:`zodapi.app`.
"""
