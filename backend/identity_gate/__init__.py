"""
identity-gate: OAuth2 authorization-code client and identity resolution.

The library never configures logging on import. A host process that embeds it
installs the loguru sink once at startup:

    from identity_gate.common import setup_logging

    setup_logging()           # level from settings.log_level (LOG_LEVEL)
    setup_logging("DEBUG")    # explicit level
"""

__version__ = "0.1.0"
