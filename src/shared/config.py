"""Runtime settings resolved from the environment."""

import os
from pathlib import Path

from pydantic import BaseModel


def resolve_env() -> str:
    return (os.getenv("DINEDESK_ENV") or os.getenv("ENV") or os.getenv("ENVIRONMENT") or "development").lower()


class Settings(BaseModel):
    env: str = "development"
    data_dir: Path = Path("data")
    menu_file: str = "menu.json"
    orders_file: str = "orders.csv"
    log_dir: Path = Path("logs")

    @property
    def menu_path(self) -> Path:
        return self.data_dir / self.menu_file

    @property
    def orders_path(self) -> Path:
        return self.data_dir / self.orders_file

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            env=resolve_env(),
            data_dir=Path(os.getenv("DINEDESK_DATA_DIR", "data")),
            menu_file=os.getenv("DINEDESK_MENU_FILE", "menu.json"),
            orders_file=os.getenv("DINEDESK_ORDERS_FILE", "orders.csv"),
            log_dir=Path(os.getenv("DINEDESK_LOG_DIR", "logs")),
        )
