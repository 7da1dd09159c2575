# -*- coding: utf-8 -*-
import json
import os
from datetime import datetime


def read_json_list(file_path):
    """
    Lê uma lista JSON do disco.
    Arquivo inexistente equivale a uma lista vazia.
    """
    if not os.path.exists(file_path):
        return [], None

    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = json.load(f)

        if not isinstance(data, list):
            return [], f"Conteúdo inesperado em {file_path}: esperado uma lista."

        return data, None

    except (OSError, ValueError) as e:
        return [], f"Erro ao ler {file_path}: {e}"


def write_json_list(file_path, items):
    """
    Escreve a lista no disco (indentação de 2 espaços, UTF-8).
    O conteúdo vai primeiro para um arquivo temporário, trocado de uma vez.
    """
    try:
        directory = os.path.dirname(os.path.abspath(file_path))
        os.makedirs(directory, exist_ok=True)

        tmp_path = f"{file_path}.tmp"
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(items, f, indent=2, ensure_ascii=False)
        os.replace(tmp_path, file_path)

        return True, None

    except OSError as e:
        return False, f"Erro ao salvar {file_path}: {e}"


def set_aside_file(file_path):
    """
    Renomeia um arquivo ilegível para '<nome>.corrupt-YYYYMMDD_HHMMSS',
    preservando o conteúdo original para recuperação manual.

    Returns:
        tuple[str | None, str | None]: (novo caminho, mensagem de erro)
    """
    new_path = f"{file_path}.corrupt-{datetime.now().strftime('%Y%m%d_%H%M%S')}"
    try:
        os.replace(file_path, new_path)
        return new_path, None
    except OSError as e:
        return None, f"Erro ao mover {file_path}: {e}"
