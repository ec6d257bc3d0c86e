from pathlib import Path
from typing import Annotated, Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Config(BaseSettings):
    if Path('.env').exists():
        model_config = SettingsConfigDict(env_file='.env', env_file_encoding='utf-8')
    else:
        model_config = SettingsConfigDict()

    bot_token: str

    # Required in webhook mode only
    webhook_host: str | None = None
    webhook_path: str = ''

    # Webhook listener
    backend_host: str = '0.0.0.0'
    backend_port: int = 80

    # Comma separated in env, e.g. ADMIN_IDS=1,2
    admin_ids: Annotated[list[int] | None, NoDecode] = None
    notify_admins_on_error: bool = False

    # Reject mismatched end tags in plain messages instead of ignoring them
    strict_html: bool = False

    # Logging level
    logging_level: Literal['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'] = 'INFO'

    @field_validator('admin_ids', mode='before')
    def split_ids(cls, ids: int | str | list[int] | None) -> list[int]:
        if not ids:
            return []
        elif isinstance(ids, int):
            return [ids]
        elif isinstance(ids, str):
            return list(map(int, ids.split(',')))
        elif isinstance(ids, list):
            return ids
        else:
            raise ValueError(
                f'admin_ids must be an int or comma separated list of ints, instead of {type(ids)}'
            )

    @property
    def webhook_url(self) -> str:
        return f'https://{self.webhook_host}{self.webhook_path}'


CONFIG = Config()
