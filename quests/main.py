from __future__ import annotations

import logging
from pathlib import Path

from dotenv import load_dotenv

from quests.assets.registry import load_game_assets
from quests.game_loop import GameController
from quests.game_setup import create_game
from quests.settings import settings_from_env
from quests.view.terminal import TerminalView

logger = logging.getLogger(__name__)

# quests/main.py -> quests/ -> project root
_project_root = Path(__file__).resolve().parents[1]


def main() -> None:
    load_dotenv(dotenv_path=_project_root / ".env", override=False)
    settings = settings_from_env()

    logging.basicConfig(level=settings.log_level)
    logger.info("Starting a %d-player game (seed=%s)", settings.num_players, settings.seed)

    assets = load_game_assets(root=_project_root, strict=settings.strict_assets)
    game = create_game(settings=settings, assets=assets)
    controller = GameController.from_settings(game, TerminalView(), settings)
    controller.start_game()


if __name__ == "__main__":
    main()
