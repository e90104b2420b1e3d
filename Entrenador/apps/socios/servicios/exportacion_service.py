"""
Filas planas para el respaldo en hoja de cálculo.

Solo arma los datos; escribir el archivo le corresponde a quien los consuma.
"""
import logging

from apps.entrenamiento.models import PlanNutricionalAsignado, RutinaAsignada
from apps.socios.models import CAMPOS_MEDIDAS, FotoProgreso, Medicion, Socio
from apps.socios.servicios.calendario import (
    ESTADO_ACTIVO,
    ESTADO_POR_VENCER,
    formatear_fecha,
)
from apps.socios.servicios.fotos_service import url_foto

logger = logging.getLogger(__name__)

ETIQUETAS_ESTADO = {
    ESTADO_ACTIVO: "Activo",
    ESTADO_POR_VENCER: "Por Vencer",
}
ETIQUETA_VENCIDO = "Vencido"

ETIQUETAS_ESTADO_ASIGNACION = {
    "active": "Activa",
    "completed": "Completada",
    "paused": "Pausada",
}


def calcular_edad(fecha_nacimiento, hoy):
    if fecha_nacimiento is None:
        return None
    edad = hoy.year - fecha_nacimiento.year
    if (hoy.month, hoy.day) < (fecha_nacimiento.month, fecha_nacimiento.day):
        edad -= 1
    return edad


def _si_no(valor):
    return "Sí" if valor else "No"


def _numero(valor):
    return float(valor) if valor is not None else ""


def fila_socio(socio, hoy):
    condicion = getattr(socio, "condicion_medica", None)
    edad = calcular_edad(socio.FechaNacimiento, hoy)
    return {
        "Tipo Doc": socio.TipoDocumento,
        "Cédula": socio.Cedula,
        "Nombre Completo": socio.NombreCompleto,
        "Teléfono": socio.Telefono,
        "Fecha Nacimiento": formatear_fecha(socio.FechaNacimiento),
        "Edad": f"{edad} años" if edad is not None else "",
        "Peso Inicial (kg)": _numero(socio.PesoInicial),
        "Altura (cm)": _numero(socio.Altura),
        "Tiene Patología": _si_no(condicion and condicion.TienePatologia),
        "Detalle Patología": (condicion.DetallePatologia if condicion else "") or "",
        "Tiene Lesión": _si_no(condicion and condicion.TieneLesion),
        "Detalle Lesión": (condicion.DetalleLesion if condicion else "") or "",
        "Tiene Alergias": _si_no(condicion and condicion.TieneAlergias),
        "Detalle Alergias": (condicion.DetalleAlergias if condicion else "") or "",
        "Fecha Inicio": formatear_fecha(socio.FechaInicio),
        "Duración (meses)": socio.DuracionMeses,
        "Fecha Fin": formatear_fecha(socio.FechaFin),
        "Estado": ETIQUETAS_ESTADO.get(socio.estado(hoy), ETIQUETA_VENCIDO),
        "Fecha Registro": formatear_fecha(socio.CreadoEn),
        "Última Actualización": formatear_fecha(socio.ActualizadoEn),
    }


def fila_medicion(medicion):
    socio = medicion.SocioID
    fila = {
        "Cliente": socio.NombreCompleto,
        "Cédula": socio.documento,
        "Fecha Medición": formatear_fecha(medicion.Fecha),
        "Objetivo": medicion.Objetivo or "",
    }
    for _, atributo, etiqueta in CAMPOS_MEDIDAS:
        fila[etiqueta] = _numero(getattr(medicion, atributo))
    fila["Notas"] = medicion.Notas or ""
    fila["Fecha Registro"] = formatear_fecha(medicion.CreadoEn)
    return fila


def fila_asignacion(asignacion, tipo, hoy):
    return {
        "Cliente": asignacion.SocioID.NombreCompleto,
        "Cédula": asignacion.SocioID.documento,
        "Tipo": tipo,
        "Plantilla": asignacion.PlantillaID.Nombre,
        "Fecha Asignación": formatear_fecha(asignacion.FechaAsignacion),
        "Fecha Inicio": formatear_fecha(asignacion.FechaInicio),
        "Fecha Fin": formatear_fecha(asignacion.FechaFin),
        "Estado": ETIQUETAS_ESTADO_ASIGNACION[asignacion.estado(hoy)],
        "Notas": asignacion.Notas or "",
    }


def fila_foto(foto):
    medicion = foto.MedicionID
    return {
        "Cliente": medicion.SocioID.NombreCompleto,
        "Cédula": medicion.SocioID.documento,
        "Fecha Medición": formatear_fecha(medicion.Fecha),
        "Tipo Foto": foto.get_TipoFoto_display(),
        "URL": url_foto(foto),
    }


def filas_exportacion(hoy):
    """
    Datos de todas las hojas del respaldo.

    Returns:
        dict nombre_hoja -> list de filas (dict columna -> valor). Las hojas
        sin filas se omiten, salvo Clientes.
    """
    socios = Socio.objects.select_related("condicion_medica")
    mediciones = Medicion.objects.select_related("SocioID")
    rutinas = RutinaAsignada.objects.select_related("SocioID", "PlantillaID")
    planes = PlanNutricionalAsignado.objects.select_related("SocioID", "PlantillaID")
    fotos = FotoProgreso.objects.select_related("MedicionID__SocioID")

    hojas = {
        "Clientes": [fila_socio(s, hoy) for s in socios],
        "Mediciones": [fila_medicion(m) for m in mediciones],
        "Asignaciones": [fila_asignacion(a, "Rutina", hoy) for a in rutinas]
        + [fila_asignacion(a, "Plan nutricional", hoy) for a in planes],
        "Fotos": [fila_foto(f) for f in fotos],
    }

    hojas = {nombre: filas for nombre, filas in hojas.items() if filas or nombre == "Clientes"}
    logger.info("Exportación preparada: %s", {nombre: len(filas) for nombre, filas in hojas.items()})
    return hojas
