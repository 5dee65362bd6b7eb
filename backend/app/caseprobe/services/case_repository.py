"""CaseProbe - Case Repository

用例的增删改查。列表与创建按所属用户隔离；按 ID 的单条操作不做所属校验。
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from caseprobe.core.errors import ConflictError, not_found_case
from caseprobe.database.models import Case
from caseprobe.models.case_schemas import CaseCreate, CaseUpdate

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100
# offset = (page - 1) * limit 必须落在 64 位有符号整数内
MAX_PAGE = (2 ** 63 - 1) // MAX_LIMIT

TITLE_EXISTS_MESSAGE = "Case with that title already exists"


class CaseRepository:
    """用例仓储"""

    def __init__(self, db: Session):
        self.db = db

    def list(
        self,
        owner_id: UUID,
        page: int = DEFAULT_PAGE,
        limit: int = DEFAULT_LIMIT,
    ) -> list[Case]:
        """分页列出用户的用例，按 id 升序"""
        offset = (page - 1) * limit
        return (
            self.db.query(Case)
            .filter(Case.user_id == owner_id)
            .order_by(Case.id.asc())
            .offset(offset)
            .limit(limit)
            .all()
        )

    def create(self, owner_id: UUID, req: CaseCreate) -> Case:
        """创建用例

        Raises:
            ConflictError: 标题重复
        """
        case = Case(
            user_id=owner_id,
            title=req.title,
            host=req.host,
            uri=req.uri,
            method=req.method,
            request_body=req.request_body,
            expected_result=req.expected_result,
            category=req.category or "",
            used=False,
        )
        self.db.add(case)
        self._commit(conflict_message=TITLE_EXISTS_MESSAGE)

        logger.info(f"用例已创建: {case.id} (owner={owner_id})")
        return self.get(case.id)

    def get(self, case_id: UUID) -> Case:
        """按 ID 获取用例

        Raises:
            NotFoundError: 用例不存在
        """
        case = self.find(case_id)
        if case is None:
            raise not_found_case(case_id)
        return case

    def find(self, case_id: UUID) -> Optional[Case]:
        return self.db.query(Case).filter(Case.id == case_id).first()

    def update(self, case_id: UUID, req: CaseUpdate) -> Case:
        """部分更新：只覆盖提供且非 null 的字段

        Raises:
            NotFoundError: 用例不存在，或写入时已被删除
            ConflictError: 新标题与其它用例重复
        """
        self.get(case_id)

        values = {
            key: value
            for key, value in req.model_dump(exclude_unset=True).items()
            if value is not None
        }
        return self._write(case_id, values)

    def record_response(self, case_id: UUID, response_code: str, response_body: str) -> Case:
        """写入最近一次发送的响应（覆盖旧值）"""
        return self._write(
            case_id,
            {"response_code": response_code, "response_body": response_body},
        )

    def delete(self, case_id: UUID) -> None:
        """删除用例

        Raises:
            NotFoundError: 没有删除任何行
        """
        deleted = self.db.query(Case).filter(Case.id == case_id).delete(synchronize_session=False)
        self.db.commit()
        if deleted == 0:
            raise not_found_case(case_id)
        logger.info(f"用例已删除: {case_id}")

    # ========== 内部方法 ==========

    def _write(self, case_id: UUID, values: dict[str, Any]) -> Case:
        values["updated_at"] = datetime.now(timezone.utc)
        try:
            updated = (
                self.db.query(Case)
                .filter(Case.id == case_id)
                .update(values, synchronize_session=False)
            )
        except IntegrityError as e:
            self.db.rollback()
            raise ConflictError(TITLE_EXISTS_MESSAGE) from e
        if updated == 0:
            self.db.rollback()
            raise not_found_case(case_id)
        self._commit(conflict_message=TITLE_EXISTS_MESSAGE)

        # commit 后会话已过期，这里重新读取最新数据
        return self.get(case_id)

    def _commit(self, conflict_message: str) -> None:
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise ConflictError(conflict_message) from e
