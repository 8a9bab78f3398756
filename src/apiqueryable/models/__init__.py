# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Data models and query model types for apiqueryable.

- :mod:`~apiqueryable.models.expressions`: Predicate nodes and the ``Property`` factory.
- :mod:`~apiqueryable.models.query_nodes`: Immutable query chain nodes.
- :mod:`~apiqueryable.models.entity`: ``Entity`` base dataclass for typed collections.
- :mod:`~apiqueryable.models.query_builder`: Deferred ``ApiQuery`` builder.

Note:
    This ``__init__.py`` does not import/export models. Import directly from
    the specific module files, or use the top-level :mod:`apiqueryable` package.
"""

__all__ = []
