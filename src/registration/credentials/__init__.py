"""
credential provider discovery for hosts that embed the registration client.

nothing in the client or the cli calls into this package. authentication
belongs to the transport, so a host that needs credentials builds its
providers here and configures the httpx client it hands to HttpxTransport.
"""
from .importer import CredentialProvider, CredentialProviderImporter

__all__ = ["CredentialProvider", "CredentialProviderImporter"]
