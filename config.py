"""
Módulo de Configuração

Define a classe de configuração principal. Implementa o padrão 'Fail Fast':
se uma variável estiver inválida, o pacote nem chega a ser importado.
"""

import os
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

# Carrega variáveis do arquivo .env
load_dotenv()


class Config:
    """
    Classe de configuração base do motor financeiro.
    """

    # === LOGGING ===
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()

    # === FUSO HORÁRIO DA ESCOLA ===
    # Define o "hoje" usado quando o chamador não injeta uma data de referência.
    TIMEZONE = os.environ.get('TIMEZONE', 'Africa/Maputo')

    try:
        ZONA = ZoneInfo(TIMEZONE)
    except (ZoneInfoNotFoundError, ValueError):
        raise ValueError(f"ERRO CRÍTICO: fuso horário '{TIMEZONE}' inválido no .env.")
