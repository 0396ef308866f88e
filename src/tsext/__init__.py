"""tsext core package.

Locates tsconfig.json, node_modules, typings.json and typings for a source
context, inside it or above it in the owning project, and republishes the ones
found outside under virtual paths inside the context. Callable from IDE/LSP
hosts and from the ``tsext`` CLI.
"""

import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "core",
]
