# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Query translators lowering query chains into REST or OData wire parameters.
"""

from ._translator import TranslatedQuery, get_translator
from ._rest import RestTranslator
from ._odata import ODataTranslator

__all__ = ["TranslatedQuery", "get_translator", "RestTranslator", "ODataTranslator"]
