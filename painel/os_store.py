# -*- coding: utf-8 -*-
"""
Armazenamento das Ordens de Serviço do painel.

Mantém a lista em memória e a grava no arquivo JSON após cada alteração.
As rotas do Flask rodam em várias threads, então todo acesso passa pelo lock.
Os métodos que alteram a lista devolvem (resultado, erro de gravação).
"""
import copy
import os
import threading

from painel.file_handler import read_json_list, set_aside_file, write_json_list
from rpa_contaazul.utils import setup_logger

logger = setup_logger("painel_os_store")


class OrdemServicoStore:
    def __init__(self, data_file, archive_file):
        self.data_file = data_file
        self.archive_file = archive_file
        self._lock = threading.RLock()

        self._ordens, error = read_json_list(data_file)
        if error:
            logger.error(f"Erro ao carregar backup: {error}")
            self._set_aside_unreadable_backup()
        else:
            logger.info(f"Backup carregado: {len(self._ordens)} OS em {data_file}.")

    def _set_aside_unreadable_backup(self):
        # A próxima gravação sobrescreveria o arquivo: o original vai para o lado antes
        if not os.path.exists(self.data_file):
            return
        new_path, error = set_aside_file(self.data_file)
        if error:
            raise RuntimeError(f"Backup ilegível e não foi possível preservá-lo: {error}")
        logger.warning(f"Backup ilegível preservado em {new_path}. O painel inicia vazio.")

    def _find(self, numero):
        for ordem in self._ordens:
            if ordem.get("numero") == numero:
                return ordem
        return None

    def salvar(self):
        """
        Grava a lista atual no arquivo de dados.

        Returns:
            tuple[bool, str | None]: (sucesso, mensagem de erro)
        """
        with self._lock:
            ok, error = write_json_list(self.data_file, self._ordens)
        if error:
            logger.error(error)
        else:
            logger.debug("Backup salvo automaticamente.")
        return ok, error

    def listar(self):
        with self._lock:
            return copy.deepcopy(self._ordens)

    def obter(self, numero):
        with self._lock:
            ordem = self._find(numero)
            return copy.deepcopy(ordem) if ordem else None

    def criar(self, numero, status):
        """
        Adiciona uma nova OS.

        Returns:
            tuple[dict | None, str | None]: (OS criada ou None se o número já
            existir, mensagem de erro de gravação)
        """
        with self._lock:
            if self._find(numero):
                return None, None
            ordem = {"numero": numero, "status": status, "urgente": False, "observacoes": ""}
            self._ordens.append(ordem)
            _, error = self.salvar()
            return dict(ordem), error

    def atualizar(self, numero, changes):
        with self._lock:
            ordem = self._find(numero)
            if not ordem:
                return None, None
            ordem.update(changes)
            _, error = self.salvar()
            return dict(ordem), error

    def alternar_urgente(self, numero):
        with self._lock:
            ordem = self._find(numero)
            if not ordem:
                return None, None
            ordem["urgente"] = not ordem.get("urgente", False)
            _, error = self.salvar()
            return dict(ordem), error

    def excluir(self, numero):
        with self._lock:
            ordem = self._find(numero)
            if not ordem:
                return False, None
            self._ordens.remove(ordem)
            _, error = self.salvar()
            return True, error

    def arquivar(self, numero):
        """
        Move a OS para o arquivo de OS arquivadas (substitui a exclusão).

        Returns:
            tuple[bool, str | None]: (arquivada, mensagem de erro)
        """
        with self._lock:
            ordem = self._find(numero)
            if not ordem:
                return False, None

            arquivadas, error = read_json_list(self.archive_file)
            if error:
                logger.error(error)
                return False, error

            arquivadas.append(ordem)
            ok, error = write_json_list(self.archive_file, arquivadas)
            if not ok:
                logger.error(error)
                return False, error

            self._ordens.remove(ordem)
            _, error = self.salvar()
            logger.info(f"OS {numero} arquivada em {self.archive_file}.")
            return True, error

    def resetar(self):
        with self._lock:
            self._ordens = []
            return self.salvar()
