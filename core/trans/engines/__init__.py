"""Translation backend adapters.

Importing this package defines, and thereby registers, every concrete BackendAdapter:

- AzureTranslation: Azure AI Translator REST API (engine name "azure").
- DeeplTranslation: DeepL official client (engine name "deepl").
"""

from core.trans.engines.trans_azure import AzureTranslation
from core.trans.engines.trans_deepl import DeeplTranslation

__all__: list[str] = ["AzureTranslation", "DeeplTranslation"]
