import pytest

from conftest import auth_headers, datos_usuario
from usuarios_api.models import Usuario

ROL_INVALIDO = 'El rol ingresado no es válido, debe ser "admin" o "usuario".'
SOLO_ADMIN = {
    "message": "Solo los usuarios con rol admin pueden ser actualizados.",
    "status": False,
}
NO_ENCONTRADO = {"message": "Usuario no encontrado."}


@pytest.fixture
def headers(admin):
    return admin[1]


@pytest.fixture
def admin_id(admin):
    return admin[0]["user"]["id"]


@pytest.fixture
def usuario_id(registrar):
    body, _ = registrar()
    return body["user"]["id"]


def stored(db, usuario_id) -> Usuario:
    db.expire_all()
    return db.query(Usuario).filter_by(id=usuario_id).one()


# =====================================================
# listUsers
# =====================================================

def test_list_users_en_orden_sin_hash(client, headers, usuario_id, admin_id):
    response = client.get("/usuarios/listUsers", headers=headers)

    assert response.status_code == 200
    usuarios = response.json()
    assert [u["id"] for u in usuarios] == [admin_id, usuario_id]
    for usuario in usuarios:
        assert set(usuario) == {"id", "name", "email", "role", "created_at", "updated_at"}


# =====================================================
# addUser
# =====================================================

def test_add_user(client, headers, db):
    response = client.post(
        "/usuarios/addUser",
        json=datos_usuario(email="pedro@example.com"),
        headers=headers,
    )

    assert response.status_code == 200
    assert response.json() == {"message": "Usuario creado correctamente", "status": True}
    creado = db.query(Usuario).filter_by(email="pedro@example.com").one()
    assert creado.password_hash != "123456"


def test_add_user_rol_invalido_es_400(client, headers, db):
    response = client.post(
        "/usuarios/addUser",
        json=datos_usuario(email="pedro@example.com", role="superadmin"),
        headers=headers,
    )

    assert response.status_code == 400
    assert response.json() == {"message": ROL_INVALIDO, "status": False}
    assert db.query(Usuario).filter_by(email="pedro@example.com").first() is None


def test_add_user_validacion_estructural_antes_que_el_rol(client, headers):
    response = client.post(
        "/usuarios/addUser",
        json=datos_usuario(email="pedro@example.com", password="123", role="superadmin"),
        headers=headers,
    )

    assert response.status_code == 422
    assert list(response.json()["errors"]) == ["password"]


def test_add_user_email_duplicado(client, headers):
    response = client.post(
        "/usuarios/addUser",
        json=datos_usuario(email="ana@example.com"),
        headers=headers,
    )

    assert response.status_code == 422
    assert list(response.json()["errors"]) == ["email"]


# =====================================================
# getUser
# =====================================================

def test_get_user(client, headers, usuario_id):
    response = client.get(f"/usuarios/getUser/{usuario_id}", headers=headers)

    assert response.status_code == 200
    assert response.json()["email"] == "juan@example.com"
    assert "password_hash" not in response.json()


def test_get_user_inexistente(client, headers):
    response = client.get("/usuarios/getUser/999", headers=headers)

    assert response.status_code == 404
    assert response.json() == NO_ENCONTRADO


def test_id_no_entero_es_404(client, headers, admin_id):
    respuestas = [
        client.get("/usuarios/getUser/abc", headers=headers),
        client.put("/usuarios/updateUser/abc", json={"name": "X"}, headers=headers),
        client.delete("/usuarios/deleteUser/abc", headers=headers),
    ]

    for response in respuestas:
        assert response.status_code == 404
        assert response.json() == NO_ENCONTRADO


# =====================================================
# updateUser
# =====================================================

def test_update_usuario_no_admin_siempre_falla(client, headers, usuario_id, db):
    antes = stored(db, usuario_id).name

    for cambios in ({"name": "Juan Actualizado"}, {"name": "", "email": "mal"}, {}):
        response = client.put(f"/usuarios/updateUser/{usuario_id}", json=cambios, headers=headers)
        assert response.status_code == 422
        assert response.json() == SOLO_ADMIN

    assert stored(db, usuario_id).name == antes


def test_update_usuario_no_admin_aunque_lo_pida_el_propio_usuario(client, registrar):
    body, propio_headers = registrar(email="luis@example.com")

    response = client.put(
        f"/usuarios/updateUser/{body['user']['id']}",
        json={"name": "Luis"},
        headers=propio_headers,
    )

    assert response.status_code == 422
    assert response.json() == SOLO_ADMIN


def test_update_admin_parcial_solo_nombre(client, headers, admin_id, db):
    antes = stored(db, admin_id)
    email, role, password_hash = antes.email, antes.role, antes.password_hash

    response = client.put(
        f"/usuarios/updateUser/{admin_id}", json={"name": "Ana María"}, headers=headers
    )

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Usuario actualizado correctamente"
    assert body["data"]["name"] == "Ana María"
    despues = stored(db, admin_id)
    assert (despues.email, despues.role, despues.password_hash) == (email, role, password_hash)


def test_update_por_usuario_no_admin_sobre_admin(client, registrar, admin_id):
    _, usuario_headers = registrar()

    response = client.put(
        f"/usuarios/updateUser/{admin_id}", json={"name": "Editado"}, headers=usuario_headers
    )

    assert response.status_code == 200
    assert response.json()["data"]["name"] == "Editado"


def test_update_password_vacia_no_cambia(client, headers, admin_id, db):
    antes = stored(db, admin_id).password_hash

    for password in ("", None):
        response = client.put(
            f"/usuarios/updateUser/{admin_id}", json={"password": password}, headers=headers
        )
        assert response.status_code == 200

    assert stored(db, admin_id).password_hash == antes


def test_update_password_nueva(client, headers, admin_id, db):
    response = client.put(
        f"/usuarios/updateUser/{admin_id}", json={"password": "nueva123"}, headers=headers
    )

    assert response.status_code == 200
    assert stored(db, admin_id).password_hash != "nueva123"
    login = client.post("/login", json={"email": "ana@example.com", "password": "nueva123"})
    assert login.status_code == 200


def test_update_validacion_de_campos(client, headers, admin_id):
    response = client.put(
        f"/usuarios/updateUser/{admin_id}",
        json={"name": None, "email": "no-es-email", "password": "123"},
        headers=headers,
    )

    assert response.status_code == 422
    errors = response.json()["errors"]
    assert set(errors) == {"name", "email", "password"}
    assert errors["name"] == ["El campo nombre es obligatorio."]


def test_update_email_unico_excepto_el_propio(client, headers, admin_id, usuario_id):
    propio = client.put(
        f"/usuarios/updateUser/{admin_id}", json={"email": "ana@example.com"}, headers=headers
    )
    assert propio.status_code == 200

    ajeno = client.put(
        f"/usuarios/updateUser/{admin_id}", json={"email": "juan@example.com"}, headers=headers
    )
    assert ajeno.status_code == 422
    assert list(ajeno.json()["errors"]) == ["email"]


def test_update_email_ajeno_y_password_corta(client, headers, admin_id, usuario_id):
    response = client.put(
        f"/usuarios/updateUser/{admin_id}",
        json={"email": "juan@example.com", "password": "123"},
        headers=headers,
    )

    assert response.status_code == 422
    assert list(response.json()["errors"]) == ["email", "password"]


def test_update_rol_invalido(client, headers, admin_id):
    response = client.put(
        f"/usuarios/updateUser/{admin_id}", json={"role": "root"}, headers=headers
    )

    assert response.status_code == 422
    assert response.json() == {"message": ROL_INVALIDO}


def test_update_cambio_de_rol_bloquea_siguientes_actualizaciones(client, headers, admin_id):
    response = client.put(
        f"/usuarios/updateUser/{admin_id}", json={"role": "usuario"}, headers=headers
    )
    assert response.status_code == 200
    assert response.json()["data"]["role"] == "usuario"

    otra = client.put(
        f"/usuarios/updateUser/{admin_id}", json={"role": "admin"}, headers=headers
    )
    assert otra.status_code == 422
    assert otra.json() == SOLO_ADMIN


def test_update_inexistente(client, headers):
    response = client.put("/usuarios/updateUser/999", json={"name": "X"}, headers=headers)

    assert response.status_code == 404
    assert response.json() == NO_ENCONTRADO


# =====================================================
# deleteUser
# =====================================================

def test_delete_user(client, headers, registrar):
    body, usuario_headers = registrar(email="borrar@example.com")
    usuario_id = body["user"]["id"]

    response = client.delete(f"/usuarios/deleteUser/{usuario_id}", headers=headers)
    assert response.status_code == 200
    assert response.json() == {"message": "Usuario eliminado correctamente"}

    segunda = client.delete(f"/usuarios/deleteUser/{usuario_id}", headers=headers)
    assert segunda.status_code == 404
    assert segunda.json() == NO_ENCONTRADO

    assert client.get("/user", headers=usuario_headers).status_code == 401
    assert client.get(f"/usuarios/getUser/{usuario_id}", headers=headers).status_code == 404
