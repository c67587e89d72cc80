import enum


class PrintableEnum(enum.Enum):
    def __str__(self) -> str:
        return self.name

    __repr__ = __str__


def source_window(code: str, idx: int, radius: int = 10) -> tuple[str, int]:
    """Cut ``code`` down to ``radius`` characters around ``idx``

    Returns the excerpt, with "..." marking each cut side, and the offset of ``idx`` inside that excerpt.
    """
    start_idx = max(0, idx - radius)
    end_idx = min(len(code), idx + radius)
    ellipsis_pre = start_idx > 0
    ellipsis_post = end_idx < len(code)
    excerpt = ("..." if ellipsis_pre else "") + code[start_idx:end_idx] + ("..." if ellipsis_post else "")
    return excerpt, idx - start_idx + (3 if ellipsis_pre else 0)
