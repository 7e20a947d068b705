"""
AI summarization boundary.
Turns the installer's JSON report into the consolidated technical report text.
"""
from typing import Optional

import ollama

from solarview.core.config import settings
from solarview.core.exceptions import ExternalServiceError
from solarview.core.logger import logger

FINAL_REPORT_PROMPT = """
Você é um engenheiro especialista em instalações de energia solar e sua tarefa é gerar um relatório técnico final.

Analise o relatório do instalador, que está em formato JSON, e use as informações para criar um texto coeso e profissional.

O relatório final deve incluir:
- O nome do cliente.
- O número do protocolo fornecido.
- Uma descrição técnica da instalação, resumindo os principais componentes (potência do painel, inversores, etc.).
- Uma análise das medições elétricas (VCC e CA), destacando se os valores estão dentro do esperado.
- Uma confirmação dos componentes e cabeamento utilizados.
- Uma menção à documentação fotográfica e de vídeo.
- As observações finais do instalador.
- Uma conclusão geral sobre a qualidade e o status da instalação.

Seja claro, objetivo e use uma linguagem técnica apropriada. O relatório é para fins de documentação e verificação final.

Número de Protocolo: {protocol_number}
Relatório do Instalador (JSON):
```json
{installer_report}
```
"""


class ReportSummarizer:
    """Base class for final report generators. Enforces the Strategy Pattern."""

    def summarize(self, installer_report: str, protocol_number: str) -> str:
        raise NotImplementedError


class OllamaReportSummarizer(ReportSummarizer):
    """Generates the report with a local Ollama model."""

    def __init__(self, host: str = None, model: str = None, temperature: float = None):
        self.host = host or settings.OLLAMA_HOST
        self.model = model or settings.OLLAMA_MODEL
        self.temperature = settings.SUMMARIZER_TEMPERATURE if temperature is None else temperature
        self.client = ollama.Client(host=self.host)

    def summarize(self, installer_report: str, protocol_number: str) -> str:
        prompt = FINAL_REPORT_PROMPT.format(
            protocol_number=protocol_number,
            installer_report=installer_report
        )
        try:
            response = self.client.chat(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                options={"temperature": self.temperature}
            )
        except Exception as e:
            logger.error(f"Ollama generation error: {e}")
            raise ExternalServiceError(f"Report generation failed: {e}") from e

        content = response['message']['content']
        if not content or not content.strip():
            raise ExternalServiceError("Report generation returned an empty text")
        return content.strip()


_summarizer_instance: Optional[ReportSummarizer] = None


def get_summarizer() -> ReportSummarizer:
    """Get or create the summarizer singleton"""
    global _summarizer_instance
    if _summarizer_instance is None:
        _summarizer_instance = OllamaReportSummarizer()
    return _summarizer_instance
