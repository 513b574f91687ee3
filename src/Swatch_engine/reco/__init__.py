from .rank import rank, rank_multi, rank_frame

__all__ = [
    "rank",
    "rank_multi",
    "rank_frame",
]

def __getattr__(name: str):
    if name in __all__:
        from .rank import (
            rank,
            rank_multi,
            rank_frame,
        )
        return {
            "rank": rank,
            "rank_multi": rank_multi,
            "rank_frame": rank_frame,
        }[name]
    raise AttributeError(name)
