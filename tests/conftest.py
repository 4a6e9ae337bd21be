"""测试公共夹具"""

from pathlib import Path
from typing import List, Tuple, Union

import pytest

from figma_context_mcp.config import FigmaConfig
from figma_context_mcp.services import FigmaService

API_BASE_URL = "https://api.figma.com/v1"


class RecordingDownloader:
    """记录下载调用的假下载器，不访问网络"""

    def __init__(self, fail_on: Tuple[str, ...] = ()):
        self.calls: List[Tuple[str, str, str]] = []
        self.fail_on = fail_on

    async def __call__(self, file_name: str, local_path: Union[str, Path], image_url: str) -> str:
        self.calls.append((file_name, str(local_path), image_url))
        if file_name in self.fail_on:
            raise OSError(f"磁盘写入失败: {file_name}")
        return str(Path(local_path) / file_name)


@pytest.fixture
def config() -> FigmaConfig:
    return FigmaConfig(api_key="figd_test_token", base_url=API_BASE_URL)


@pytest.fixture
def downloader() -> RecordingDownloader:
    return RecordingDownloader()


@pytest.fixture
def service(config: FigmaConfig, downloader: RecordingDownloader) -> FigmaService:
    return FigmaService(config, downloader=downloader)
