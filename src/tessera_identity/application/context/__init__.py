from tessera_identity.application.context.identity_context import IdentityContext

__all__ = ["IdentityContext"]
