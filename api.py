from __future__ import annotations

import os
from typing import Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from depgraph.config import AnalysisConfig
from depgraph.errors import DiscoveryError
from depgraph.model import AnalysisResult
from depgraph.pipeline import analyze_repository
from depgraph.summarize import render_summary


app = FastAPI(title="Dependency Graph Analyzer")


class AnalyzeRequest(BaseModel):
	root_path: str
	config: Optional[AnalysisConfig] = None


class SummaryResponse(BaseModel):
	summary: str


def _analyze(req: AnalyzeRequest) -> AnalysisResult:
	root = os.path.abspath(req.root_path)
	try:
		return analyze_repository(root, req.config)
	except DiscoveryError as e:
		raise HTTPException(status_code=400, detail=str(e))


@app.post("/analyze", response_model=AnalysisResult)
def analyze(req: AnalyzeRequest) -> AnalysisResult:
	return _analyze(req)


@app.post("/summary", response_model=SummaryResponse)
def summary(req: AnalyzeRequest) -> SummaryResponse:
	return SummaryResponse(summary=render_summary(_analyze(req)))


@app.get("/health")
def health() -> dict:
	return {"status": "ok"}


def create_app() -> FastAPI:
	return app
