# -*- coding: utf-8 -*-
"""
Busca Ordens de Serviço no ContaAzul pelo terminal.

Uso:
    python buscar_os.py 1234 5678     # busca cada número informado
    python buscar_os.py               # modo interativo (linha vazia encerra)

As abas ficam abertas no Chrome para o operador conferir o resultado.
"""
import argparse

from rpa_contaazul.bot_controller import SearchWorker
from rpa_contaazul.utils import setup_logger

logger = setup_logger("buscar_os")


def print_result(numero, result):
    if result["ok"]:
        print(f"✅ OS {numero}: {result['message']}")
    else:
        print(f"❌ OS {numero}: {result['error']}")


def iter_numeros(numeros):
    if numeros:
        yield from numeros
        return

    while True:
        try:
            numero = input("Número da OS (vazio para sair): ").strip()
        except EOFError:
            return
        if not numero:
            return
        yield numero


def main(argv=None):
    parser = argparse.ArgumentParser(description="Pesquisa Ordens de Serviço no ContaAzul.")
    parser.add_argument("numeros", nargs="*", help="números das OS a pesquisar")
    args = parser.parse_args(argv)

    worker = SearchWorker()
    failures = 0
    interrupted = False
    try:
        for numero in iter_numeros(args.numeros):
            result = worker.submit(numero).result()
            print_result(numero, result)
            if not result["ok"]:
                failures += 1

        if worker.session_holder.is_acquired:
            try:
                input("Pressione Enter para encerrar a sessão do navegador...")
            except EOFError:
                pass
    except KeyboardInterrupt:
        # Ctrl+C durante a espera pelo login manual: cancela a busca em andamento
        interrupted = True
        logger.warning("Interrompido pelo operador. Cancelando buscas pendentes...")
    finally:
        worker.shutdown(cancel_pending=interrupted)

    if interrupted:
        return 130

    logger.info(f"Buscas encerradas ({failures} com falha).")
    return 1 if failures else 0


if __name__ == "__main__":
    raise SystemExit(main())
