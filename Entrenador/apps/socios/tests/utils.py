import io
from datetime import date
from unittest import mock

from django.core.files.storage import InMemoryStorage
from django.core.files.uploadedfile import SimpleUploadedFile
from PIL import Image

from apps.socios.models import Socio
from apps.socios.servicios.calendario import sumar_meses


class AlmacenamientoQueFalla(InMemoryStorage):
    """Almacenamiento que no puede borrar objetos."""

    def delete(self, name):
        raise OSError(f"No se pudo borrar {name}")


class AlmacenamientoConFallos(InMemoryStorage):
    """Almacenamiento en memoria que falla solo donde el test lo indica."""

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.rutas_que_fallan = set()
        self.falla_al_guardar = False

    def _save(self, name, content):
        if self.falla_al_guardar:
            raise OSError(f"No se pudo guardar {name}")
        return super()._save(name, content)

    def delete(self, name):
        if name in self.rutas_que_fallan:
            raise OSError(f"No se pudo borrar {name}")
        super().delete(name)


def crear_socio(cedula="12345678", nombre="María Pérez", fecha_inicio=date(2024, 1, 1), duracion=1, **extra):
    datos = {
        "TipoDocumento": Socio.DOCUMENTO_VENEZOLANO,
        "Cedula": cedula,
        "NombreCompleto": nombre,
        "Telefono": "+58 412 1234567",
        "FechaInicio": fecha_inicio,
        "DuracionMeses": duracion,
        "FechaFin": sumar_meses(fecha_inicio, duracion),
    }
    datos.update(extra)
    return Socio.objects.create(**datos)


def imagen_subida(nombre="foto.jpg", formato="JPEG", content_type="image/jpeg", tamano=(16, 16)):
    buffer = io.BytesIO()
    Image.new("RGB", tamano, color=(200, 30, 30)).save(buffer, format=formato)
    return SimpleUploadedFile(nombre, buffer.getvalue(), content_type=content_type)


class AlmacenamientoEnMemoriaMixin:
    """Reemplaza el almacenamiento de fotos por uno en memoria durante cada test."""

    almacenamiento_cls = InMemoryStorage

    def setUp(self):
        super().setUp()
        self.almacenamiento = self.almacenamiento_cls()
        self.usar_almacenamiento(self.almacenamiento)

    def usar_almacenamiento(self, almacenamiento):
        for destino in (
            "apps.socios.servicios.fotos_service.obtener_almacenamiento",
            "apps.entrenamiento.servicios.rutinas_service.obtener_almacenamiento",
        ):
            parche = mock.patch(destino, return_value=almacenamiento)
            parche.start()
            self.addCleanup(parche.stop)
