"""ダブルクォートを考慮したCSVの行・項目分割

ダブルクォートは「クォート内」状態を切り替えるだけで、
連続した2つのダブルクォート（""）をエスケープとしては扱わない。
"""
from typing import List

QUOTE = '"'
SEPARATOR = ","


def split_csv_lines(text: str) -> List[str]:
    """CSVテキストを論理行に分割する

    クォート外の改行（LF、CRLF、CR）でのみ分割するため、
    クォートで囲まれた項目内の改行は行に含まれたまま残る。
    空白だけの行は捨てる。クォート文字は行に残す。
    """
    lines: List[str] = []
    current: List[str] = []
    in_quotes = False
    i = 0
    length = len(text)

    while i < length:
        char = text[i]

        if char == QUOTE:
            in_quotes = not in_quotes
            current.append(char)
        elif char in ("\r", "\n") and not in_quotes:
            line = "".join(current)
            if line.strip():
                lines.append(line)
            current = []
            if char == "\r" and i + 1 < length and text[i + 1] == "\n":
                i += 1
        else:
            current.append(char)
        i += 1

    line = "".join(current)
    if line.strip():
        lines.append(line)

    return lines


def split_csv_fields(line: str) -> List[str]:
    """論理行を項目に分割する（クォート文字は取り除く）"""
    fields: List[str] = []
    current: List[str] = []
    in_quotes = False

    for char in line:
        if char == QUOTE:
            in_quotes = not in_quotes
        elif char == SEPARATOR and not in_quotes:
            fields.append("".join(current))
            current = []
        else:
            current.append(char)
    fields.append("".join(current))

    return fields
