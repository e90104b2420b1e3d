from __future__ import annotations

import logging
from typing import Dict, List

from django.db import transaction

from apps.entrenamiento.models import PlantillaNutricional
from apps.socios.excepciones import ValidationError

logger = logging.getLogger(__name__)

MACROS = [
    ("proteina_g", "ProteinaG", "Proteína (g)"),
    ("carbohidratos_g", "CarbohidratosG", "Carbohidratos (g)"),
    ("grasas_g", "GrasasG", "Grasas (g)"),
]


def _entero_opcional(valor, etiqueta):
    if valor is None or valor == "":
        return None
    try:
        return int(valor)
    except (TypeError, ValueError):
        raise ValidationError(f"{etiqueta}: debe ser un número entero.")


@transaction.atomic
def crear_plantilla_nutricional(
    nombre: str,
    descripcion: str = "",
    objetivo: str | None = None,
    calorias_diarias: int | None = None,
    **macros,
) -> PlantillaNutricional:
    """Crea una plantilla de plan nutricional reutilizable."""
    if not nombre or not nombre.strip():
        raise ValidationError("El nombre del plan es obligatorio.")

    if objetivo and objetivo not in dict(PlantillaNutricional.OBJETIVO_CHOICES):
        raise ValidationError(f"Objetivo inválido: {objetivo}.")

    calorias = _entero_opcional(calorias_diarias, "Calorías")
    if calorias is not None and calorias <= 0:
        raise ValidationError("Las calorías diarias deben ser un número positivo.")

    valores = {}
    for clave, atributo, etiqueta in MACROS:
        valor = _entero_opcional(macros.get(clave), etiqueta)
        if valor is not None and valor < 0:
            raise ValidationError(f"{etiqueta}: no puede ser negativo.")
        valores[atributo] = valor

    plantilla = PlantillaNutricional.objects.create(
        Nombre=nombre.strip(),
        Descripcion=(descripcion or "").strip() or None,
        Objetivo=objetivo or None,
        CaloriasDiarias=calorias,
        **valores,
    )
    logger.info("Plantilla nutricional %s creada", plantilla.id)
    return plantilla


def listar_plantillas_nutricionales() -> List[Dict]:
    """Metadatos de las plantillas disponibles, con cuántos clientes las usan."""
    return [
        {
            "id": p.id,
            "nombre": p.Nombre,
            "descripcion": p.Descripcion or "",
            "objetivo": p.Objetivo,
            "calorias_diarias": p.CaloriasDiarias,
            "proteina_g": p.ProteinaG,
            "carbohidratos_g": p.CarbohidratosG,
            "grasas_g": p.GrasasG,
            "asignaciones": p.asignaciones.count(),
        }
        for p in PlantillaNutricional.objects.all()
    ]
