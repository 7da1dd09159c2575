import os

from flask import (
    Blueprint,
    abort,
    current_app,
    jsonify,
    request,
    send_file,
    send_from_directory,
)
from painel.validators import validate_numero, validate_status, validate_update_payload
from rpa_contaazul.utils import setup_logger


bp = Blueprint("main", __name__)
logger = setup_logger("painel_main")

OS_NAO_ENCONTRADA = "OS não encontrada."
ERRO_AO_SALVAR = "Erro ao salvar."


def get_store():
    return current_app.extensions["os_store"]


@bp.route("/")
def index():
    return send_from_directory(current_app.config["PUBLIC_DIR"], "index.html")


@bp.route("/api/os", methods=["GET"])
def listar_os():
    return jsonify(get_store().listar())


@bp.route("/api/os", methods=["POST"])
def criar_os():
    data = request.get_json(silent=True) or {}
    numero = data.get("numero")
    status = data.get("status")

    is_valid, error = validate_numero(numero, current_app.config["NUMERO_PATTERN"])
    if not is_valid:
        return jsonify({"error": error}), 400

    is_valid, error = validate_status(status, current_app.config["STATUS_VALIDOS"])
    if not is_valid:
        return jsonify({"error": error}), 400

    ordem, error = get_store().criar(numero, status)
    if ordem is None:
        return jsonify({"error": "OS já existente."}), 400
    if error:
        return jsonify({"error": ERRO_AO_SALVAR}), 500

    logger.info(f"OS {numero} criada com status '{status}'.")
    return jsonify({"ok": True}), 201


@bp.route("/api/os/<numero>", methods=["GET"])
def obter_os(numero):
    ordem = get_store().obter(numero)
    if not ordem:
        return jsonify({"error": OS_NAO_ENCONTRADA}), 404
    return jsonify(ordem)


@bp.route("/api/os/<numero>", methods=["PUT"])
def atualizar_os(numero):
    data = request.get_json(silent=True) or {}

    changes, error = validate_update_payload(data, current_app.config["STATUS_VALIDOS"])
    if changes is None:
        return jsonify({"error": error}), 400

    ordem, error = get_store().atualizar(numero, changes)
    if ordem is None:
        return jsonify({"error": OS_NAO_ENCONTRADA}), 404
    if error:
        return jsonify({"error": ERRO_AO_SALVAR}), 500

    return jsonify({"ok": True})


@bp.route("/api/os/urgente/<numero>", methods=["PUT"])
def alternar_urgente(numero):
    ordem, error = get_store().alternar_urgente(numero)
    if not ordem:
        return jsonify({"error": OS_NAO_ENCONTRADA}), 404
    if error:
        return jsonify({"error": ERRO_AO_SALVAR}), 500
    return jsonify({"ok": True, "urgente": ordem["urgente"]})


@bp.route("/api/os/<numero>", methods=["DELETE"])
def excluir_os(numero):
    excluida, error = get_store().excluir(numero)
    if not excluida:
        return jsonify({"error": OS_NAO_ENCONTRADA}), 404
    if error:
        return jsonify({"error": ERRO_AO_SALVAR}), 500
    logger.info(f"OS {numero} excluída.")
    return jsonify({"ok": True})


@bp.route("/api/arquivar/<numero>", methods=["POST"])
def arquivar_os(numero):
    arquivada, error = get_store().arquivar(numero)
    if error:
        return jsonify({"error": "Erro ao arquivar."}), 500
    if not arquivada:
        return jsonify({"error": OS_NAO_ENCONTRADA}), 404
    return jsonify({"ok": True})


@bp.route("/api/reset", methods=["POST"])
def resetar_painel():
    ok, _ = get_store().resetar()
    if not ok:
        return jsonify({"error": ERRO_AO_SALVAR}), 500
    logger.warning("Painel resetado: todas as OS foram removidas.")
    return jsonify({"ok": True})


@bp.route("/api/save", methods=["GET"])
def salvar():
    ok, _ = get_store().salvar()
    if not ok:
        return jsonify({"error": ERRO_AO_SALVAR}), 500
    return jsonify({"ok": True})


@bp.route("/backup.json")
def baixar_backup():
    data_file = get_store().data_file
    if not os.path.exists(data_file):
        abort(404)
    return send_file(data_file, as_attachment=True, download_name="backup.json")
