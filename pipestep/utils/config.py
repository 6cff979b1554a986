"""
Módulo de configuração centralizada.

Carrega configurações do arquivo config.yaml na raiz do projeto.
"""

import yaml
from pathlib import Path
from typing import Any, Dict


class Config:
    """Classe para carregar e acessar configurações do projeto."""

    _instance = None
    _config = None

    def __new__(cls):
        """Singleton para garantir uma única instância de configuração."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        """Inicializa e carrega as configurações."""
        if self._config is None:
            self._load_config()

    def _load_config(self):
        """Carrega o arquivo config.yaml."""
        # Caminho para config.yaml (3 níveis acima: utils -> pipestep -> raiz)
        config_path = Path(__file__).parent.parent.parent / "config.yaml"

        if not config_path.exists():
            raise FileNotFoundError(
                f"Arquivo de configuração não encontrado: {config_path}"
            )

        with open(config_path, "r", encoding="utf-8") as f:
            self._config = yaml.safe_load(f) or {}

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Obtém um valor de configuração usando notação de pontos.

        Args:
            key_path: Caminho da chave usando pontos (ex: 'stepping.padding')
            default: Valor padrão se a chave não existir

        Returns:
            Valor da configuração ou default

        Exemplo:
            >>> config = Config()
            >>> config.get('stepping.padding')
            6
        """
        keys = key_path.split(".")
        value = self._config

        try:
            for key in keys:
                value = value[key]
            return value
        except (KeyError, TypeError):
            return default

    @property
    def display_config(self) -> Dict[str, Any]:
        """Retorna opções de exibição do pandas."""
        return self._config.get("display", {})

    # Getters específicos para o passo a passo
    def get_padding(self) -> int:
        """Retorna o número de caracteres somados à maior etapa no cabeçalho."""
        return self.get("stepping.padding", 6)

    def get_preview_rows(self) -> int:
        """Retorna quantas linhas/elementos mostrar na prévia de cada etapa."""
        return self.get("stepping.preview_rows", 6)

    def get_separator_char(self) -> str:
        """Retorna o caractere usado nas linhas separadoras do cabeçalho."""
        return self.get("stepping.separator_char", "=")

    def get_indent(self) -> str:
        """Retorna a indentação usada após cada operador de encadeamento."""
        return self.get("stepping.indent", "  ")

    def get_display_options(self) -> Dict[str, Any]:
        """Retorna opções do pandas no formato 'display.<opção>'."""
        return {f"display.{key}": value for key, value in self.display_config.items()}

    def __getitem__(self, key: str) -> Any:
        """Permite acesso via colchetes."""
        return self.get(key)

    def __repr__(self) -> str:
        """Representação em string da configuração."""
        return f"Config(loaded_keys={list(self._config.keys())})"


# Instância global de configuração
config = Config()


def get_config() -> Config:
    """
    Função auxiliar para obter a instância de configuração.

    Returns:
        Instância singleton de Config

    Exemplo:
        >>> from pipestep.utils.config import get_config
        >>> cfg = get_config()
        >>> print(cfg.get('stepping.preview_rows'))
        6
    """
    return config
