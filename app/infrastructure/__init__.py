"""Infrastructure modules for conversational command argument resolution.

Centralized infrastructure components:
- commands: Argument types, resolution state machine, collector
- configuration: Settings management (Settings, CommandArgumentSettings)
- logging: Structured logging (configure_logging, get_module_logger)
- platforms: Platform-agnostic message models and transport protocols
- services: Application-scoped providers (get_settings, get_type_registry)
"""
