from __future__ import annotations

import logging
import time
from typing import Any

import requests

from config import OraConfig
from ora.context import build_context
from ora.synthesizer import synthesize
from vision.types import AnalysisResult

log = logging.getLogger(__name__)


class OraClient:
    """
    Answers questions about an analysed image.

    In "simulated" mode the answer comes from the local rule table; in
    "remote" mode the context and query are POSTed to the configured ORA
    endpoint. Failures are returned as `{"error": True, "message": ...}`.
    """

    def __init__(self, config: OraConfig):
        self.config = config

    def query(self, image_analysis: Any, query: Any) -> Any:
        log.info("[ORA] query=%r mode=%s", query, self.config.mode)

        try:
            if not isinstance(query, str):
                raise TypeError(f"query must be a string, got {type(query).__name__}")
            if isinstance(image_analysis, AnalysisResult):
                analysis = image_analysis
            else:
                analysis = AnalysisResult.model_validate(image_analysis)

            context = build_context(analysis)
            log.debug("[ORA] context:\n%s", context)

            if self.config.mode == "remote":
                return self._post(context, query)

            if self.config.simulated_latency > 0:
                time.sleep(self.config.simulated_latency)
            return synthesize(analysis, query).model_dump()
        except Exception as e:
            log.error("[ORA] %s", e)
            return {"error": True, "message": f"Failed to query ORA API: {e}"}

    def _post(self, context: str, query: str) -> Any:
        response = requests.post(
            self.config.api_url,
            json={"context": context, "query": query},
            headers={"Authorization": f"Bearer {self.config.api_key}"},
            timeout=self.config.timeout,
        )
        response.raise_for_status()
        return response.json()
