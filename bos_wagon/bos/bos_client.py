"""
BOS客户端构建
- 每个仓库会话独占一个 BosClient 实例，不做全局共享
- 凭证（AK/SK）由调用方提供，缺失时直接报认证错误
"""

from __future__ import annotations

from typing import Optional

from baidubce.auth.bce_credentials import BceCredentials
from baidubce.bce_client_configuration import BceClientConfiguration
from baidubce.services.bos.bos_client import BosClient

from ..core.config import BosSettings
from ..core.exceptions import AuthenticationError
from ..core.logger import logger


def connect_bos(access_key_id: Optional[str],
                secret_access_key: Optional[str],
                endpoint: str,
                settings: Optional[BosSettings] = None) -> BosClient:
    """
    创建BOS客户端实例

    Args:
        access_key_id: Access Key ID
        secret_access_key: Secret Access Key
        endpoint: BOS endpoint（如 bj.bcebos.com）
        settings: 超时和缓冲区配置，默认使用 BosSettings()

    Returns:
        BosClient

    Raises:
        AuthenticationError: 凭证缺失或客户端初始化失败
    """
    if not access_key_id or not secret_access_key:
        raise AuthenticationError(endpoint, "missing access key id or secret access key")

    settings = settings or BosSettings()
    try:
        config = BceClientConfiguration(
            credentials=BceCredentials(access_key_id, secret_access_key),
            endpoint=endpoint
        )
        # 超时和缓冲区
        config.connection_timeout_in_mills = settings.connection_timeout_in_mills
        config.send_buf_size = settings.send_buf_size
        config.recv_buf_size = settings.recv_buf_size

        client = BosClient(config)
    except Exception as e:
        logger.error(f"✗ BOS客户端初始化失败: {endpoint} ({e})")
        raise AuthenticationError(endpoint, str(e), e) from e

    logger.info(f"✓ BOS客户端初始化成功: {endpoint}")
    return client
