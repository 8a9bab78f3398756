# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Core infrastructure components for apiqueryable.

This module contains the foundational components including authentication,
configuration, the HTTP transport, endpoint resolution, serialization and
error handling.
"""

__all__ = []
