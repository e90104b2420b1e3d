"""
Validación de imágenes subidas (fotos de progreso y de ejercicios).
"""
import os

from PIL import Image, UnidentifiedImageError

from apps.socios.excepciones import ArchivoInvalidoError

EXTENSIONES = {
    "image/jpeg": "jpg",
    "image/jpg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
}


def extension_para(archivo):
    """Extensión del objeto a partir del tipo de contenido; si no, del nombre."""
    tipo = getattr(archivo, "content_type", None)
    if tipo in EXTENSIONES:
        return EXTENSIONES[tipo]
    _, ext = os.path.splitext(getattr(archivo, "name", "") or "")
    return ext.lstrip(".").lower() or "jpg"


def validar_imagen(archivo, tipos_permitidos, max_bytes):
    """
    Verifica tipo, tamaño y contenido de una imagen antes de almacenarla.

    Args:
        archivo: UploadedFile (o cualquier File con content_type y size)
        tipos_permitidos: lista de tipos MIME aceptados
        max_bytes: tamaño máximo en bytes

    Raises:
        ArchivoInvalidoError: si la imagen no cumple alguna de las reglas
    """
    if archivo is None:
        raise ArchivoInvalidoError("No se recibió ningún archivo.")

    tipo = getattr(archivo, "content_type", None)
    if tipo not in tipos_permitidos:
        raise ArchivoInvalidoError(
            f"Tipo de archivo no permitido ({tipo}). Usa: {', '.join(tipos_permitidos)}."
        )

    if archivo.size > max_bytes:
        limite_mb = max_bytes / (1024 * 1024)
        raise ArchivoInvalidoError(f"La imagen supera el tamaño máximo de {limite_mb:g} MB.")

    try:
        archivo.seek(0)
        Image.open(archivo).verify()
    except (UnidentifiedImageError, OSError, SyntaxError):
        raise ArchivoInvalidoError("El archivo no es una imagen válida.")
    finally:
        archivo.seek(0)
