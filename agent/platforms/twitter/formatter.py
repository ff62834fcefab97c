"""
Twitter Platform Formatter
트위터 길이 제한 맞추기
"""
import re

ELLIPSIS = "..."
SENTENCE_SPLIT = re.compile(r'[.!?]+')


def format_for_twitter(text: str, max_length: int = 280) -> str:
    """문장 경계에서 자르기. 한 문장도 안 들어가면 강제 자르기 + '...'"""
    if len(text) <= max_length:
        return text

    result = ""
    for sentence in SENTENCE_SPLIT.split(text):
        candidate = result + sentence + "."
        if len(candidate) <= max_length - len(ELLIPSIS):
            result = candidate
        else:
            break

    if not result:
        return truncate_to_twitter_limit(text, max_length)
    return result + ELLIPSIS


def truncate_to_twitter_limit(text: str, max_length: int = 280) -> str:
    """트위터 제한에 맞게 텍스트 자르기"""
    if len(text) <= max_length:
        return text
    return text[:max_length - len(ELLIPSIS)] + ELLIPSIS
