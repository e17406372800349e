"""Rasterize a report into one tall supersampled bitmap."""
from dataclasses import dataclass
from typing import Dict, List, Mapping, Tuple

from PIL import Image, ImageDraw, ImageFont

from poetique.config import Settings
from poetique.models import AnalysisResult
from poetique.report import Block, report_blocks

PADDING = 32


@dataclass(frozen=True)
class Style:
    size: int
    color: str
    indent: int = 0
    space_before: int = 0
    space_after: int = 8
    line_height: float = 1.45


STYLES: Dict[str, Style] = {
    "title": Style(30, "#0f172a", space_after=6),
    "subtitle": Style(20, "#64748b", space_after=10),
    "badge": Style(14, "#4338ca", space_after=12),
    "heading": Style(22, "#0f172a", space_before=22, space_after=10),
    "label": Style(12, "#94a3b8", space_before=6, space_after=4),
    "body": Style(15, "#475569"),
    "poem": Style(17, "#1e293b", indent=16, space_after=12, line_height=1.6),
    "quote": Style(15, "#475569", indent=16),
    "question": Style(17, "#0f172a", space_before=12),
    "answer": Style(14, "#475569", indent=16),
    "keypoints": Style(12, "#64748b", indent=16),
    "footer": Style(11, "#64748b", space_before=24),
}

# (font, colour, x, y, text)
Run = Tuple[ImageFont.ImageFont, str, int, int, str]


def _split_word(word: str, font, max_width: float) -> List[str]:
    """Break a word wider than ``max_width`` into character chunks."""
    chunks = []
    current = ""
    for ch in word:
        if current and font.getlength(current + ch) > max_width:
            chunks.append(current)
            current = ch
        else:
            current += ch
    chunks.append(current)
    return chunks


def wrap_line(text: str, font, max_width: float) -> List[str]:
    """Greedy word wrap of a single line to ``max_width`` pixels."""
    lines = []
    current = ""
    for word in text.split(" "):
        test = f"{current} {word}" if current else word
        if font.getlength(test) <= max_width:
            current = test
            continue
        if current:
            lines.append(current)
        pieces = _split_word(word, font, max_width)
        lines.extend(pieces[:-1])
        current = pieces[-1]
    lines.append(current)
    return lines


class ReportRasterizer:
    def __init__(self, settings: Settings):
        self.width = settings.capture_width
        self.scale = settings.capture_scale
        self.background = settings.page_background
        self.font_path = settings.font_path
        self._fonts: Dict[int, ImageFont.ImageFont] = {}

    def _font(self, size: int):
        px = size * self.scale
        if px not in self._fonts:
            if self.font_path:
                self._fonts[px] = ImageFont.truetype(self.font_path, px)
            else:
                self._fonts[px] = ImageFont.load_default(size=px)
        return self._fonts[px]

    def layout(self, blocks: List[Block]) -> Tuple[List[Run], int]:
        s = self.scale
        runs: List[Run] = []
        y = PADDING * s
        for block in blocks:
            style = STYLES[block.style]
            font = self._font(style.size)
            x = (PADDING + style.indent) * s
            max_width = (self.width - 2 * PADDING - style.indent) * s
            step = int(style.size * style.line_height * s)
            y += style.space_before * s
            # keep the source line breaks (poem text, multi-paragraph answers)
            for source_line in block.text.split("\n"):
                for line in wrap_line(source_line, font, max_width):
                    runs.append((font, style.color, x, y, line))
                    y += step
            y += style.space_after * s
        return runs, y + PADDING * s

    def capture(self, result: AnalysisResult, visible_answers: Mapping[int, bool]) -> Image.Image:
        runs, height = self.layout(report_blocks(result, visible_answers))
        img = Image.new("RGB", (self.width * self.scale, height), self.background)
        draw = ImageDraw.Draw(img)
        for font, color, x, y, text in runs:
            draw.text((x, y), text, font=font, fill=color)
        return img
