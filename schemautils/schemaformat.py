"""字符串格式识别

按固定顺序检查，第一个匹配的格式生效: date-time > email > uri > uuid
"""
import re

FORMATS = [
    ('date-time', re.compile(
        r'\d{4}-\d{2}-\d{2}(T\d{2}:\d{2}:\d{2}(\.\d{3})?(Z|[+-]\d{2}:\d{2})?)?', re.ASCII)),
    ('email', re.compile(r'[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}')),
    ('uri', re.compile(r'(https?|ftp)://[^\s/$.?#].\S*')),
    ('uuid', re.compile(
        r'[0-9a-f]{8}-[0-9a-f]{4}-[1-5][0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}', re.IGNORECASE)),
]


def detect_format(text):
    for name, pattern in FORMATS:
        # fullmatch: '$' 会匹配结尾的换行
        if pattern.fullmatch(text):
            return name
    return None


def build_string(text, detect=True):
    schema = {
        'type': 'string',
    }
    if detect:
        detected = detect_format(text)
        if detected:
            schema.update(format=detected)
    return schema
