# -*- coding: utf-8 -*-
"""
Módulo de Validações do painel.

Cada função valida UMA regra dos dados de uma OS, retornando (True, "")
se válido, ou (False, "Mensagem de Erro") se inválido.
"""

import re


def validate_numero(value, pattern):
    """
    /// O número da OS é obrigatório, textual e segue o formato configurado
    /// (por padrão, exatamente 4 dígitos).
    """
    if value is None or not isinstance(value, str) or value.strip() == "":
        return False, "Número da OS obrigatório."

    if not re.fullmatch(pattern, value):
        return False, "Formato inválido."

    return True, ""


def validate_status(value, valid_statuses):
    if not value or value not in valid_statuses:
        return False, "Status inválido."
    return True, ""


def validate_update_payload(data, valid_statuses):
    """
    /// Valida a atualização parcial de uma OS. Campos com tipo errado são
    /// ignorados (urgente precisa ser booleano, observacoes texto); um status
    /// presente precisa ser válido.
    """
    changes = {}

    status = data.get("status")
    if status:
        is_valid, error = validate_status(status, valid_statuses)
        if not is_valid:
            return None, error
        changes["status"] = status

    if isinstance(data.get("urgente"), bool):
        changes["urgente"] = data["urgente"]

    if isinstance(data.get("observacoes"), str):
        changes["observacoes"] = data["observacoes"]

    return changes, ""
