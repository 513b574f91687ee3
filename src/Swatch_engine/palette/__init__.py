__all__ = [
    "generate_harmony",
    "harmony_targets",
    "recommend_palettes",
]

def __getattr__(name: str):
    if name in ("generate_harmony", "harmony_targets"):
        from .harmony import generate_harmony, harmony_targets
        return {"generate_harmony": generate_harmony, "harmony_targets": harmony_targets}[name]
    if name == "recommend_palettes":
        from .recommend import recommend_palettes
        return recommend_palettes
    raise AttributeError(name)
