import secrets
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

class RedisConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix='LB_REDIS_', env_file='.env', extra='ignore')

    url: str = 'redis://localhost:6379/0'
    client_name: str = 'leaderboard-api'
    socket_timeout: float = 5.0
    socket_connect_timeout: float = 5.0

store = RedisConfig()

class NamespaceConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix='LB_KEY_', env_file='.env', extra='ignore')

    user: str = 'lb:user:'
    activity: str = 'lb:act:'
    timestamp: str = 'lb:ts:'

namespaces = NamespaceConfig()

class ServerConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix='LB_', env_file='.env', extra='ignore')

    server_name: str = 'leaderboard-api'
    server_path: str = ''
    host: str = '0.0.0.0'
    port: int = 8000
    workers: int = 1
    log_level: str = 'INFO'
    # A fresh key per process invalidates every token on restart
    secret_key: str = Field(default_factory=lambda: secrets.token_hex(32))

server = ServerConfig()
