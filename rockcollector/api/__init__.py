from rockcollector.api.converter import router as converter_router
from rockcollector.api.expeditions import router as expeditions_router
from rockcollector.api.game import router as game_router
from rockcollector.api.health import router as health_router
from rockcollector.api.minigames import router as minigames_router
from rockcollector.api.packs import router as packs_router

__all__ = [
    "converter_router",
    "expeditions_router",
    "game_router",
    "health_router",
    "minigames_router",
    "packs_router",
]
