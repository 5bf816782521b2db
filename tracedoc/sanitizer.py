#!filepath: tracedoc/sanitizer.py
from __future__ import annotations

import re
from typing import List

# 最长的箭头放前面，保证 '-->>' 不会被当成 '-->'
_ARROW = re.compile(r"--?>>|--?>|--?x|--?\)|==>|-\.->")
_ASSIGN = re.compile(r":+=")
_ANGLE_SEGMENT = re.compile(r"<[^<>]*>")
_LABEL_JUNK = re.compile(r'[:;"]')
_SPACES = re.compile(r"\s+")


class DiagramSanitizer:
    """
    DiagramSanitizer（FINAL）

    只处理 ```mermaid fenced block，block 外文本原样保留。

    block 内规则：
      - ':=' -> '='
      - 边 / 转移行（箭头后跟 ': label'）只清洗 label：
        去掉多余冒号、分号、双引号和 <...> 片段；左侧原样保留

    sanitize(sanitize(x)) == sanitize(x)
    """

    def __init__(self, fence: str = "mermaid"):
        self.fence = fence

    def sanitize(self, text: str) -> str:
        out: List[str] = []
        inside = False
        for line in text.split("\n"):
            stripped = line.strip()
            if not inside and stripped.startswith("```") and stripped[3:].strip() == self.fence:
                inside = True
            elif inside and stripped == "```":
                inside = False
            elif inside:
                line = self.sanitize_line(line)
            out.append(line)
        return "\n".join(out)

    def sanitize_line(self, line: str) -> str:
        line = _ASSIGN.sub("=", line)

        arrow = _ARROW.search(line)
        if arrow is None or ":" in line[:arrow.start()]:
            return line

        colon = line.find(":", arrow.end())
        if colon == -1:
            return line

        left, label = line[:colon], line[colon + 1:]
        # '<<x>>' 需要多轮才能清干净
        while _ANGLE_SEGMENT.search(label):
            label = _ANGLE_SEGMENT.sub("", label)
        label = _LABEL_JUNK.sub("", label)
        label = _SPACES.sub(" ", label).strip()
        return f"{left}: {label}" if label else f"{left}:"
