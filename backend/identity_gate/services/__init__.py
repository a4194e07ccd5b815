from identity_gate.services.identity_service import IdentityService, ResolvedIdentity, select_primary_email

__all__ = ["IdentityService", "ResolvedIdentity", "select_primary_email"]
