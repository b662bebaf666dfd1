# =============================================================================
# INTEGRAÇÃO PEDIDOS v1.0 - TEST CATÁLOGO
# =============================================================================

import pytest
from fastapi.testclient import TestClient

from integracao.exceptions import ProdutoNotFoundError, ValidationError

from factories import ProdutoFactory


@pytest.mark.unit
class TestCatalogoService:
    """Busca por código e busca textual."""

    def test_busca_por_codigo(self, catalogo_service, catalogo_populado):
        produto = catalogo_service.buscar_por_codigo("ABC-001")

        assert produto.codigo == "ABC-001"
        assert produto.descricao == "Parafuso ABC inox"
        assert produto.unidade_medida

    def test_codigo_com_espacos(self, catalogo_service, catalogo_populado):
        assert catalogo_service.buscar_por_codigo("  QWE-777 ").codigo == "QWE-777"

    def test_codigo_duplicado_retorna_mais_recente(self, catalogo_service, produtos_repo):
        produtos_repo.insert_one(ProdutoFactory(codigo="DUP-1", endereco="ANTIGO"))
        produtos_repo.insert_one(ProdutoFactory(codigo="DUP-1", endereco="NOVO"))

        assert catalogo_service.buscar_por_codigo("DUP-1").endereco == "NOVO"

    def test_codigo_vazio(self, catalogo_service):
        with pytest.raises(ValidationError):
            catalogo_service.buscar_por_codigo("   ")

    def test_codigo_inexistente(self, catalogo_service, catalogo_populado):
        with pytest.raises(ProdutoNotFoundError):
            catalogo_service.buscar_por_codigo("NAO-EXISTE")

    def test_pesquisa_codigo_ou_descricao(self, catalogo_service, catalogo_populado):
        """'abc' casa com código ABC-001 e com a descrição 'Arruela lisa abc'."""
        codigos = {p.codigo for p in catalogo_service.pesquisar("abc")}
        assert codigos == {"ABC-001", "XYZ-010"}

    def test_pesquisa_respeita_limit(self, catalogo_service, catalogo_populado):
        assert len(catalogo_service.pesquisar("", limit=5)) == 5

    def test_pesquisa_limit_com_filtro(self, catalogo_service, produtos_repo):
        for n in range(8):
            produtos_repo.insert_one(ProdutoFactory(descricao=f"Chave ABC {n}"))

        produtos = catalogo_service.pesquisar("abc", 5)

        assert len(produtos) == 5
        for p in produtos:
            assert "abc" in p.codigo.lower() or "abc" in p.descricao.lower()

    def test_pesquisa_filtro_vazio_retorna_recentes(self, catalogo_service, catalogo_populado):
        assert len(catalogo_service.pesquisar("")) == 13

    def test_pesquisa_limit_invalido(self, catalogo_service):
        with pytest.raises(ValidationError):
            catalogo_service.pesquisar("x", limit=0)


@pytest.mark.api
class TestProdutosApi:
    """Endpoints /api/produtos."""

    def test_get_por_codigo(self, client: TestClient, catalogo_populado):
        response = client.get("/api/produtos", params={"codigo": "XYZ-010"})

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["codigo"] == "XYZ-010"
        assert "unidadeMedida" in data

    def test_get_sem_codigo(self, client: TestClient):
        response = client.get("/api/produtos")

        assert response.status_code == 400
        assert response.json()["success"] is False

    def test_get_inexistente(self, client: TestClient, catalogo_populado):
        response = client.get("/api/produtos", params={"codigo": "NADA"})

        assert response.status_code == 404
        assert response.json()["code"] == "PRODUTO_NOT_FOUND"

    def test_post_busca(self, client: TestClient, catalogo_populado):
        response = client.post("/api/produtos", json={"filtro": "porca", "limit": 10})

        assert response.status_code == 200
        body = response.json()
        assert body["count"] == 1
        assert body["data"][0]["codigo"] == "QWE-777"

    def test_post_sem_body(self, client: TestClient, catalogo_populado):
        response = client.post("/api/produtos")

        assert response.status_code == 200
        assert response.json()["count"] == 13

    def test_post_limit_acima_do_maximo(self, client: TestClient):
        response = client.post("/api/produtos", json={"filtro": "", "limit": 501})
        assert response.status_code == 400
