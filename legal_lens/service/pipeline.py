from abc import ABC, abstractmethod
from dataclasses import dataclass

from legal_lens.analysis.models import LegalAnalysisResult
from legal_lens.extraction.models import DocumentProcessingResult
from legal_lens.service.models import ProcessedDocument


@dataclass(slots=True)
class PipelineContext:
    file_bytes: bytes
    filename: str
    mime_type: str
    file_hash: str
    document_processing: DocumentProcessingResult | None = None
    legal_analysis: LegalAnalysisResult | None = None
    document: ProcessedDocument | None = None


class PipelineStep(ABC):
    @abstractmethod
    async def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError


async def run_pipeline(steps: list[PipelineStep], context: PipelineContext) -> PipelineContext:
    for step in steps:
        context = await step.run(context)
    return context
