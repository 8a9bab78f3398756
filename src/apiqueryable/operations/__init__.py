# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Execution-side classes:

- ApiQueryProvider: materializes query chains with one HTTP GET
- ApiSet: typed collection with add/update/delete/find/get verbs
"""

__all__ = []
