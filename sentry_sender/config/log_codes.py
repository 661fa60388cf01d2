"""
Log codes for configuration-related operations.
"""

CONFIG = "config"

# Settings
SETTING = f"{CONFIG}.setting"
SETTING_RESOLVED = f"{SETTING}.resolved"
SETTING_INVALID = f"{SETTING}.invalid"
SETTINGS_MISSING_SECTION = f"{CONFIG}.missing_section"

# Proxy Configuration
PROXY = f"{CONFIG}.proxy"
PROXY_RESOLVED = f"{PROXY}.resolved"
PROXY_NOT_DEFINED = f"{PROXY}.not_defined"
PROXY_HOST_EMPTY = f"{PROXY}.host_empty"
PROXY_PROTOCOL_INVALID = f"{PROXY}.invalid_protocol"

# TLS Configuration
TLS = f"{CONFIG}.tls"
TLS_CA_BUNDLE_RESOLVED = f"{TLS}.ca_bundle_resolved"
TLS_DEFAULT_BUNDLE = f"{TLS}.default_bundle"
