"""Infrastructure modules for the communicator.

Centralized infrastructure components:
- communicator: Channel/scenario registry and payload builder
- configuration: Settings management (Settings)
- i18n: Localized values and recursive translation
- templating: Template renderer and recursive template evaluation
- notifications: Messages and delivery transports
- logging: Structured logging (get_module_logger, configure_logging)
- operations: Operation results returned by transports
- services: Application-scoped providers (get_settings)
"""
