from __future__ import annotations

from vision.types import AnalysisResult


def build_context(analysis: AnalysisResult) -> str:
    """Render an analysis as the plain-text context block sent to ORA."""
    context = "Image Analysis Results:\n"

    if analysis.labels:
        context += "Labels: " + ", ".join(
            f"{label.description} (confidence: {label.score:.2f})" for label in analysis.labels
        ) + "\n"

    context += f"Text detected: {analysis.text or 'None'}\n"

    if analysis.objects:
        context += "Objects: " + ", ".join(
            f"{obj.name} (confidence: {obj.score:.2f})" for obj in analysis.objects
        ) + "\n"

    return context
