"""
Datos para componer mensajes de WhatsApp.

El texto del mensaje y el enlace los arma quien envía; aquí solo se entregan
el teléfono normalizado, las fechas ya formateadas y los deltas con signo.
"""
import re

from apps.socios.servicios.calendario import formatear_fecha


def telefono_whatsapp(telefono):
    """Solo dígitos, con el código de país incluido ("+58 412-123" -> "58412123")."""
    return re.sub(r"\D", "", telefono or "")


def datos_mensaje_membresia(socio, hoy):
    return {
        "telefono": telefono_whatsapp(socio.Telefono),
        "nombre": socio.NombreCompleto,
        "fecha_inicio": formatear_fecha(socio.FechaInicio),
        "fecha_fin": formatear_fecha(socio.FechaFin),
        "dias_restantes": socio.dias_restantes(hoy),
        "estado": socio.estado(hoy),
    }


def datos_mensaje_progreso(reporte):
    socio = reporte.fin.SocioID
    return {
        "telefono": telefono_whatsapp(socio.Telefono),
        "nombre": socio.NombreCompleto,
        "fecha_inicio": formatear_fecha(reporte.inicio.Fecha),
        "fecha_fin": formatear_fecha(reporte.fin.Fecha),
        "cambios": [
            {"etiqueta": fila.etiqueta, "delta": fila.delta_texto, "direccion": fila.direccion}
            for fila in reporte.filas
        ],
    }
