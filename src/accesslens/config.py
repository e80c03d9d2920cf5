from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class AnalyzerConfig:
    # Contrast thresholds (WCAG AA)
    normal_text_ratio: float = 4.5
    large_text_ratio: float = 3.0
    large_text_px: float = 18.0
    large_bold_text_px: float = 14.0
    bold_weight: int = 700

    # Penalties
    contrast_penalty: int = 10
    image_alt_penalty: int = 12
    heading_order_penalty: int = 5
    label_association_penalty: int = 5
    landmark_penalty: int = 5

    # Grades, highest threshold first
    grade_thresholds: tuple[tuple[int, str], ...] = (
        (90, "AAA (Excellent)"),
        (80, "AA (Good)"),
    )
    failing_grade: str = "C (Needs Major Improvement)"

    max_input_bytes: int = 5 * 1024 * 1024
    fetch_timeout: float = 30.0
    host: str = "127.0.0.1"
    port: int = 5000

    # tag -> attribute -> (severity, penalty)
    required_attributes: dict[str, dict[str, tuple[str, int]]] = field(
        default_factory=lambda: {
            "input": {"type": ("warning", 5), "id": ("critical", 8)},
            "label": {"for": ("warning", 5)},
        }
    )

    def grade_for(self, score: int) -> str:
        for threshold, label in self.grade_thresholds:
            if score >= threshold:
                return label
        return self.failing_grade
