"""
Errores y resultados compartidos por los servicios del panel.

- ValidationError: datos faltantes o mal formados; bloquean el guardado.
- RegistroNoEncontradoError: el id referenciado no existe (no es "sin datos").
- Resultado/AdvertenciaParcial: la operación principal se completó pero
  alguna limpieza o subida de fotos falló.
"""
from dataclasses import dataclass, field
from typing import Any, List


class ValidationError(ValueError):
    """Error de validación usado en los servicios del panel."""
    pass


class IdentidadDuplicadaError(ValidationError):
    def __init__(self, tipo_documento, numero):
        self.tipo_documento = tipo_documento
        self.numero = numero
        super().__init__(f"Ya existe un cliente con cédula {tipo_documento}-{numero}")


class ArchivoInvalidoError(ValidationError):
    pass


class RegistroNoEncontradoError(LookupError):
    def __init__(self, entidad, registro_id):
        self.entidad = entidad
        self.registro_id = registro_id
        super().__init__(f"{entidad} {registro_id} no existe.")


@dataclass
class AdvertenciaParcial:
    operacion: str
    detalle: str

    def como_dict(self):
        return {"operacion": self.operacion, "detalle": self.detalle}


@dataclass
class Resultado:
    valor: Any = None
    advertencias: List[AdvertenciaParcial] = field(default_factory=list)

    @property
    def completo(self):
        return not self.advertencias

    def advertir(self, operacion, detalle):
        self.advertencias.append(AdvertenciaParcial(operacion, detalle))
