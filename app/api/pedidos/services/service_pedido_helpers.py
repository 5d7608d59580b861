from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, List, Optional

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from app.api.catalogo.repositories.repo_adicional import AdicionalRepository
from app.api.catalogo.repositories.repo_produto import ProdutoRepository
from app.api.pedidos.schemas.schema_pedido import ItemPedidoRequest


def _dec(value: float | Decimal | int) -> Decimal:
    """Converte valor para Decimal com precisão de 2 casas decimais."""
    return Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


@dataclass
class ItemPrecificado:
    produto_id: int
    quantidade: int
    preco_unitario: Decimal
    adicionais_ids: List[int]
    observacao: Optional[str] = None

    @property
    def subtotal(self) -> Decimal:
        return self.preco_unitario * self.quantidade


def precificar_itens(
    db: Session,
    itens: Iterable[ItemPedidoRequest],
    *,
    exigir_preco_positivo: bool = False,
) -> List[ItemPrecificado]:
    """
    Valida produtos/adicionais e calcula o preço unitário de cada item:
    preço do produto + soma dos adicionais escolhidos.
    """
    itens = list(itens)
    if not itens:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, "O pedido deve conter ao menos um item")

    produtos = {
        p.id: p for p in ProdutoRepository(db).buscar_por_ids({i.produto_id for i in itens})
    }
    adicionais_ids = {a for i in itens for a in i.adicionais}
    adicionais = {
        a.id: a for a in AdicionalRepository(db).buscar_por_ids(adicionais_ids)
    } if adicionais_ids else {}

    desconhecidos = sorted(adicionais_ids - set(adicionais))
    if desconhecidos:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, f"Adicionais inválidos: {desconhecidos}")

    resultado: List[ItemPrecificado] = []
    for item in itens:
        produto = produtos.get(item.produto_id)
        if not produto:
            raise HTTPException(status.HTTP_400_BAD_REQUEST, f"Produto {item.produto_id} não encontrado")
        if not produto.disponivel:
            raise HTTPException(status.HTTP_400_BAD_REQUEST, f"Produto '{produto.nome}' está indisponível")
        if exigir_preco_positivo and _dec(produto.preco) <= 0:
            raise HTTPException(status.HTTP_400_BAD_REQUEST, f"Produto '{produto.nome}' sem preço válido")

        preco_unitario = _dec(produto.preco) + sum(
            (_dec(adicionais[a].preco) for a in item.adicionais), Decimal("0")
        )
        resultado.append(
            ItemPrecificado(
                produto_id=produto.id,
                quantidade=item.quantidade,
                preco_unitario=_dec(preco_unitario),
                adicionais_ids=list(item.adicionais),
                observacao=item.observacao,
            )
        )
    return resultado


def total_itens(itens: Iterable[ItemPrecificado]) -> Decimal:
    return _dec(sum((i.subtotal for i in itens), Decimal("0")))
