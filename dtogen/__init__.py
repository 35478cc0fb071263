"""Generate NestJS create/update DTOs from TypeORM entity declarations."""

__version__ = "0.1.0"
