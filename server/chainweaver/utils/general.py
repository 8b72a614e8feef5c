"""
공통 유틸리티 함수들
"""

import time


def elapsed_ms(start_time: float) -> int:
    """time.time() 기준 시작 시각으로부터 경과한 밀리초"""
    return int(round((time.time() - start_time) * 1000))


def truncate_text(text: str, max_length: int = 100) -> str:
    """텍스트를 지정된 길이로 자르기 (생략 표시 포함)"""
    if text is None:
        return ""
    text = text.replace("\n", " ")
    if len(text) <= max_length:
        return text
    return text[:max_length-3] + "..."
