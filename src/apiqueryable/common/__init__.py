# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Common constants shared across apiqueryable.
"""

__all__ = []
