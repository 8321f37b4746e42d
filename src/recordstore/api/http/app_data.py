from dataclasses import dataclass

from recordstore.core.services import DbSessionService
from recordstore.runtime.config.config_data import ConfigData


@dataclass
class ApplicationDependencies:
    """Services shared by all requests of one application instance."""

    config: ConfigData
    database_service: DbSessionService
