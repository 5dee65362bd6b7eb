"""CaseProbe - Case Dispatcher

用例发送服务

根据已保存的用例构造外呼 HTTP 请求，执行后把响应状态行与响应体写回用例。

规则：
- 目标 URL = host + uri，原样拼接，不做任何规范化
- 方法转大写，为空时按 GET 处理；只支持 GET 与 POST
- 收到任何响应（包括 4xx/5xx）都视为成功并记录
- 传输层失败不写库；响应体读取失败时记录为空字符串
- 不修改 used 字段
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional
from uuid import UUID

import httpx

from caseprobe.core.errors import DispatchFailedError, MethodNotSupportedError
from caseprobe.database.models import Case
from caseprobe.services.case_repository import CaseRepository

logger = logging.getLogger(__name__)

DEFAULT_METHOD = "GET"
SUPPORTED_METHODS = ("GET", "POST")


@dataclass
class OutboundRequest:
    """外呼请求描述"""
    method: str
    url: str
    content: Optional[str] = None


@dataclass
class DispatchOutcome:
    """一次发送观察到的结果"""
    response_code: str
    response_body: str


def build_request(case: Case) -> OutboundRequest:
    """根据用例构造外呼请求

    Raises:
        MethodNotSupportedError: 方法不是 GET/POST
    """
    url = f"{case.host}{case.uri}"
    method = (case.method or "").strip().upper() or DEFAULT_METHOD

    if method == "GET":
        return OutboundRequest(method=method, url=url)
    if method == "POST":
        return OutboundRequest(method=method, url=url, content=case.request_body or "")
    raise MethodNotSupportedError(method)


def status_line(response: httpx.Response) -> str:
    """状态行文本，例如 "200 OK"；没有原因短语时只返回状态码"""
    return f"{response.status_code} {response.reason_phrase}".strip()


class CaseDispatcher:
    """用例发送服务"""

    def __init__(
        self,
        repository: CaseRepository,
        client_factory: Callable[[], httpx.AsyncClient],
    ):
        """
        Args:
            repository: 用例仓储
            client_factory: 外呼客户端工厂（每次发送创建一个客户端）
        """
        self.repository = repository
        self.client_factory = client_factory

    async def dispatch(self, case_id: UUID) -> Case:
        """发送用例并记录响应

        Returns:
            写入响应后的完整用例

        Raises:
            NotFoundError: 用例不存在
            MethodNotSupportedError: 方法无法发送
            DispatchFailedError: 传输层失败
        """
        case = self.repository.get(case_id)
        request = build_request(case)

        outcome = await self.send(request)
        logger.info(f"用例 {case_id} 已发送: {request.method} {request.url} -> {outcome.response_code}")

        return self.repository.record_response(
            case_id,
            response_code=outcome.response_code,
            response_body=outcome.response_body,
        )

    async def send(self, request: OutboundRequest) -> DispatchOutcome:
        """执行外呼请求

        Raises:
            DispatchFailedError: DNS、连接、超时、TLS、URL 非法等传输层失败
        """
        try:
            async with self.client_factory() as client:
                outbound = client.build_request(
                    request.method,
                    request.url,
                    content=request.content,
                )
                response = await client.send(outbound, stream=True)
                try:
                    body = await self._read_body(response)
                finally:
                    await response.aclose()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning(f"外呼失败: {request.method} {request.url}: {e!r}")
            raise DispatchFailedError(e) from e

        return DispatchOutcome(response_code=status_line(response), response_body=body)

    @staticmethod
    async def _read_body(response: httpx.Response) -> str:
        """读取响应体；读取失败时返回空字符串"""
        try:
            await response.aread()
            return response.text
        except httpx.HTTPError as e:
            logger.warning(f"响应体读取失败，按空字符串记录: {e!r}")
            return ""
