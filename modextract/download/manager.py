"""
模组下载器

按 manifest 顺序下载每个文件引用，单个失败不会中断整批下载。
"""

import asyncio
import os
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import List, Optional, Sequence, Set
from urllib.parse import unquote, urlparse

import aiofiles
import aiohttp
from loguru import logger

from modextract.config import ExtractorConfig
from modextract.exceptions import (
    DownloadError,
    DownloadNetworkError,
    MissingFileListError,
)
from modextract.models import FileReference

SEVERITY_BY_STATUS = {
    401: "ERROR",
    403: "CRITICAL",
    404: "ERROR",
}


def status_severity(status: int) -> str:
    """HTTP 状态码对应的日志级别，只影响日志，不影响流程"""
    return SEVERITY_BY_STATUS.get(status, "INFO")


@dataclass
class FetchResponse:
    """一次 HTTP 交换的结果"""

    status: int
    reason: str
    final_url: str
    body: bytes
    redirected: bool = False
    disposition_filename: Optional[str] = None


@dataclass
class FetchOutcome:
    """
    单个文件引用的下载结果。

    transport_ok 表示是否收到了响应体，severity 是由状态码决定的日志级别，
    两者相互独立。path 为 None 表示文件没有写入磁盘。
    """

    reference: FileReference
    filename: str
    transport_ok: bool
    severity: str
    status: Optional[int] = None
    reason: Optional[str] = None
    path: Optional[Path] = None
    error: Optional[DownloadError] = None

    @property
    def saved(self) -> bool:
        return self.path is not None


@dataclass
class RetrievalResult:
    """下载阶段的结果，包含已写入的文件和缺失的模组"""

    total: int = 0
    processed: int = 0
    written: List[Path] = field(default_factory=list)
    missing: List[str] = field(default_factory=list)
    outcomes: List[FetchOutcome] = field(default_factory=list)
    claimed: Set[str] = field(default_factory=set, repr=False)

    @property
    def complete(self) -> bool:
        """所有文件都已写入，仅用于报告，不代表阶段成败"""
        return not self.missing


def resolve_filename(reference: FileReference, response: FetchResponse) -> str:
    """
    确定保存的文件名

    优先使用 Content-Disposition 中的文件名，其次是重定向后 URL 的文件名，
    否则为 <projectId>-<fileId>.jar。
    """
    name = None
    if response.disposition_filename:
        name = response.disposition_filename
    elif response.redirected:
        name = unquote(PurePosixPath(urlparse(response.final_url).path).name)

    # 不允许通过文件名跳出目标目录
    name = os.path.basename(name or "")
    if name in ("", ".", ".."):
        return reference.default_filename
    return name


class ModDownloader:
    """模组下载器"""

    def __init__(
        self,
        config: Optional[ExtractorConfig] = None,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        self.config = config or ExtractorConfig()
        self.max_concurrent = self.config.max_concurrent
        self._session = session
        self._owned_session = session is None
        self._timeout = aiohttp.ClientTimeout(total=self.config.timeout)

    @property
    def session(self) -> aiohttp.ClientSession:
        """获取或创建 aiohttp session"""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                headers={"User-Agent": self.config.user_agent},
                timeout=self._timeout,
            )
        return self._session

    async def close(self):
        """关闭自己创建的 session"""
        if self._owned_session and self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def retrieve(
        self, files: Optional[Sequence[FileReference]], target_dir: Path
    ) -> RetrievalResult:
        """
        下载 manifest 中的全部文件

        Args:
            files: 文件引用列表，None 表示 manifest 中没有 files 字段
            target_dir: mods 目录

        Raises:
            MissingFileListError: manifest 中没有文件列表
        """
        if files is None:
            logger.critical("[下载] manifest 中没有 files 列表!")
            raise MissingFileListError("manifest 中没有 files 列表")

        total = len(files)
        result = RetrievalResult(total=total)

        logger.info("[下载] 开始根据 manifest 下载整合包")
        logger.info(f"[下载] manifest 中共有 {total} 个文件需要下载")

        target_dir = Path(target_dir)
        target_dir.mkdir(parents=True, exist_ok=True)

        if self.max_concurrent <= 1:
            outcomes = []
            for reference in files:
                outcomes.append(await self.download(reference, target_dir, result))
        else:
            semaphore = asyncio.Semaphore(self.max_concurrent)

            async def bounded(reference: FileReference) -> FetchOutcome:
                async with semaphore:
                    return await self.download(reference, target_dir, result)

            # gather 按传入顺序返回结果
            outcomes = list(await asyncio.gather(*(bounded(f) for f in files)))

        for outcome in outcomes:
            if outcome.saved:
                result.written.append(outcome.path)
            else:
                result.missing.append(outcome.filename)
        result.outcomes = outcomes

        logger.info(
            f"[下载] 模组下载结束: {len(result.written)} 成功, {len(result.missing)} 缺失"
        )
        return result

    async def download(
        self,
        reference: FileReference,
        target_dir: Path,
        result: Optional[RetrievalResult] = None,
    ) -> FetchOutcome:
        """下载单个文件引用，网络错误只记录不抛出"""
        url = reference.download_url(self.config.download_url)
        filename = reference.default_filename
        total = result.total if result else 1

        try:
            response = await self._fetch(url)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            index = self._advance(result)
            error = DownloadNetworkError(
                f"下载 {filename} 失败: {str(e) or type(e).__name__}",
                context={"url": url, "reference": str(reference)},
            )
            logger.error(f"[{index}/{total}] {error}")
            return FetchOutcome(
                reference=reference,
                filename=filename,
                transport_ok=False,
                severity="ERROR",
                error=error,
            )

        index = self._advance(result)
        filename = resolve_filename(reference, response)
        severity = status_severity(response.status)
        outcome = FetchOutcome(
            reference=reference,
            filename=filename,
            transport_ok=True,
            severity=severity,
            status=response.status,
            reason=response.reason,
        )

        logger.log(
            severity,
            f"[Status {response.status}] -> {response.reason} -- "
            f"[{index}/{total}] Downloading {filename}",
        )
        if response.disposition_filename:
            logger.debug(f"[下载] Content-Disposition 文件名: {response.disposition_filename}")

        if response.status == 403 and self.config.forbidden_is_missing:
            outcome.error = DownloadError(
                "HTTP 403", context={"url": url, "reference": str(reference)}
            )
            logger.error(f"[下载] {reference} 被拒绝访问，记为缺失: {filename}")
            return outcome

        if result is not None:
            if filename in result.claimed and filename != reference.default_filename:
                logger.warning(
                    f"[下载] 文件名 {filename} 已被其他模组使用，"
                    f"{reference} 改用 {reference.default_filename}"
                )
                filename = reference.default_filename
                outcome.filename = filename
            result.claimed.add(filename)

        file_path = target_dir / filename
        try:
            async with aiofiles.open(file_path, "wb") as f:
                await f.write(response.body)
        except OSError as e:
            if file_path.exists():
                try:
                    file_path.unlink()
                except OSError:
                    logger.debug(f"[下载] 无法删除不完整的文件: {file_path}")
            outcome.error = DownloadError(
                f"写入 {filename} 失败: {e}", context={"path": str(file_path)}
            )
            logger.error(f"[下载] 写入 {filename} 失败: {e}")
            return outcome

        outcome.path = file_path
        return outcome

    async def _fetch(self, url: str) -> FetchResponse:
        """发送 GET 请求并读取完整响应体"""
        async with self.session.get(
            url,
            headers={"User-Agent": self.config.user_agent},
            timeout=self._timeout,
            allow_redirects=True,
        ) as response:
            body = await response.read()
            disposition = response.content_disposition
            return FetchResponse(
                status=response.status,
                reason=response.reason or "No reason",
                final_url=str(response.url),
                body=body,
                redirected=bool(response.history),
                disposition_filename=disposition.filename if disposition else None,
            )

    @staticmethod
    def _advance(result: Optional[RetrievalResult]) -> int:
        if result is None:
            return 1
        result.processed += 1
        return result.processed
