"""
Hierarquia de exceções do pipestep.

Toda exceção do pacote herda de PipestepError, que carrega:
- message: detalhe técnico (para logs)
- user_message: texto curto para exibição no console
"""


class PipestepError(Exception):
    """Exceção base do pipestep."""

    def __init__(self, message: str, user_message: str | None = None):
        self.message = message
        self.user_message = user_message or message
        super().__init__(message)


class PipelineSyntaxError(PipestepError, ValueError):
    """O texto do pipeline não é uma expressão Python válida."""

    def __init__(self, source: str, detail: str):
        self.source = source
        super().__init__(
            message=f"Expressão de pipeline inválida: {detail}",
            user_message="Não foi possível interpretar o pipeline.",
        )


class PipelineChainError(PipestepError):
    """
    Erro terminal: uma etapa falhou e o encadeamento não pode continuar.

    O diagnóstico já foi impresso na etapa que falhou; esta exceção não repete
    os detalhes na mensagem, mas guarda a etapa e o erro original para quem
    quiser inspecioná-los.
    """

    MESSAGE = "Cannot complete pipe chain because of error."

    def __init__(
        self,
        stage_index: int | None = None,
        stage_text: str | None = None,
        original_error: BaseException | None = None,
    ):
        self.stage_index = stage_index
        self.stage_text = stage_text
        self.original_error = original_error
        super().__init__(message=self.MESSAGE)
