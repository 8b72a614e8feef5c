"""
프롬프트 템플릿 치환 및 태그 섹션 추출

LLM 출력에서 <B_Edits>...</B_Edits>, <B_Reasoning>...</B_Reasoning> 같은
태그 블록을 꺼내 템플릿 변수({nodeId}_edits 등)와 디버그 필드로 제공한다.
"""

import re
from typing import Any, Dict, Mapping, NamedTuple, Optional, Tuple

PLACEHOLDER_PATTERN = re.compile(r"\{([^{}]+)\}")


class TagExtraction(NamedTuple):
    tag: str
    suffix: str
    debug_field: str


# Adding an extracted field only needs a new row here.
TAG_EXTRACTIONS: Tuple[TagExtraction, ...] = (
    TagExtraction(tag="B_Edits", suffix="edits", debug_field="recommendations"),
    TagExtraction(tag="B_Reasoning", suffix="reasoning", debug_field="reasoning"),
)

_TAG_PATTERNS = {}


def _tag_pattern(tag: str) -> "re.Pattern":
    pattern = _TAG_PATTERNS.get(tag)
    if pattern is None:
        escaped = re.escape(tag)
        # [\s\S]*? 사용으로 멀티라인 텍스트 안전하게 매칭 (첫 번째 블록만)
        pattern = re.compile(rf"<{escaped}>([\s\S]*?)</{escaped}>")
        _TAG_PATTERNS[tag] = pattern
    return pattern


def extract_tag(text: Optional[str], tag: str) -> Optional[str]:
    """첫 번째 <tag>...</tag> 블록의 내용(앞뒤 공백 제거) 반환, 없으면 None"""
    if not text:
        return None
    match = _tag_pattern(tag).search(text)
    if match is None:
        return None
    return match.group(1).strip()


def extract_tagged_sections(text: Optional[str]) -> Dict[str, str]:
    """
    TAG_EXTRACTIONS 기준으로 모든 태그 섹션 추출

    Returns:
        Dict: {suffix: content} - only tags present in the text
    """
    sections = {}
    for extraction in TAG_EXTRACTIONS:
        content = extract_tag(text, extraction.tag)
        if content is not None:
            sections[extraction.suffix] = content
    return sections


def build_template_variables(input_prompt: str, context: Mapping[str, str]) -> Dict[str, str]:
    """
    실행 컨텍스트로부터 템플릿 변수 집합 생성

    Built fresh for every llm node. Node ids win over derived
    ``{id}_<suffix>`` names, and ``input`` is always the caller's original text.
    """
    variables: Dict[str, str] = {}
    for node_id, output in context.items():
        for suffix, content in extract_tagged_sections(output).items():
            variables[f"{node_id}_{suffix}"] = content
    for node_id, output in context.items():
        variables[node_id] = output
    variables["input"] = input_prompt
    return variables


def resolve_template(template: str, variables: Mapping[str, Any]) -> str:
    """
    {name} 플레이스홀더를 변수 값으로 치환

    Single pass: text inserted for a placeholder is not rescanned. Unknown
    names are left as the literal ``{name}``.
    """
    def _replace(match: "re.Match") -> str:
        name = match.group(1)
        if name in variables:
            return str(variables[name])
        return match.group(0)

    return PLACEHOLDER_PATTERN.sub(_replace, template)
