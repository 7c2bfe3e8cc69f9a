from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List

from src.core.session import BrowserSession

logger = logging.getLogger(__name__)


@dataclass
class Artifacts:
    base_dir: Path
    scenario_id: str

    @property
    def out_dir(self) -> Path:
        d = self.base_dir / self.scenario_id
        d.mkdir(parents=True, exist_ok=True)
        return d

    def path(self, filename: str) -> Path:
        return self.out_dir / filename

    def save_debug(self, session: BrowserSession, prefix: str) -> List[str]:
        """Screenshot + HTML. Best effort: the page may already be gone."""
        saved: List[str] = []
        png = self.path(f"{prefix}.png")
        try:
            session.screenshot(str(png))
            saved.append(str(png))
        except Exception as e:
            logger.warning("screenshot failed for %s: %s", self.scenario_id, e)
        html = self.path(f"{prefix}.html")
        try:
            html.write_text(session.content(), encoding="utf-8")
            saved.append(str(html))
        except Exception as e:
            logger.warning("html dump failed for %s: %s", self.scenario_id, e)
        return saved
