"""識別子生成ユーティリティ"""

from __future__ import annotations

import uuid


def get_uuid() -> str:
    """UUID v4 を文字列で返す。"""
    return str(uuid.uuid4())
