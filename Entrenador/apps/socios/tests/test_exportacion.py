from datetime import date
from decimal import Decimal

from django.test import SimpleTestCase, TestCase

from apps.entrenamiento.models import PlantillaRutina, RutinaAsignada
from apps.socios.models import CondicionMedica, Medicion
from apps.socios.servicios.comparacion_service import comparar_mediciones
from apps.socios.servicios.exportacion_service import calcular_edad, filas_exportacion
from apps.socios.servicios.fotos_service import subir_foto
from apps.socios.servicios.mensajeria import (
    datos_mensaje_membresia,
    datos_mensaje_progreso,
    telefono_whatsapp,
)
from apps.socios.tests.utils import AlmacenamientoEnMemoriaMixin, crear_socio, imagen_subida


class CalcularEdadTest(SimpleTestCase):
    def test_antes_y_despues_del_cumpleanios(self):
        nacimiento = date(1990, 6, 15)
        self.assertEqual(calcular_edad(nacimiento, date(2024, 6, 14)), 33)
        self.assertEqual(calcular_edad(nacimiento, date(2024, 6, 15)), 34)
        self.assertIsNone(calcular_edad(None, date(2024, 6, 15)))


class ExportacionTest(AlmacenamientoEnMemoriaMixin, TestCase):
    def setUp(self):
        super().setUp()
        self.hoy = date(2024, 2, 10)
        self.socio = crear_socio(
            fecha_inicio=date(2024, 1, 31),
            FechaNacimiento=date(1990, 6, 15),
            PesoInicial=Decimal("82.50"),
        )
        CondicionMedica.objects.create(SocioID=self.socio, TieneLesion=True, DetalleLesion="Hombro")
        self.medicion = Medicion.objects.create(SocioID=self.socio, Fecha=date(2024, 2, 1), Peso=Decimal("80"))

    def test_hojas_sin_filas_se_omiten(self):
        hojas = filas_exportacion(self.hoy)

        self.assertEqual(set(hojas), {"Clientes", "Mediciones"})

        cliente = hojas["Clientes"][0]
        self.assertEqual(cliente["Fecha Fin"], "29/02/2024")
        self.assertEqual(cliente["Edad"], "33 años")
        self.assertEqual(cliente["Estado"], "Activo")
        self.assertEqual(cliente["Tiene Lesión"], "Sí")
        self.assertEqual(cliente["Detalle Lesión"], "Hombro")
        self.assertEqual(cliente["Tiene Alergias"], "No")
        self.assertEqual(cliente["Peso Inicial (kg)"], 82.5)

        medicion = hojas["Mediciones"][0]
        self.assertEqual(medicion["Cédula"], "V-12345678")
        self.assertEqual(medicion["Peso (kg)"], 80.0)
        self.assertEqual(medicion["Cintura (cm)"], "")

    def test_estado_vencido_y_por_vencer(self):
        self.assertEqual(filas_exportacion(date(2024, 2, 27))["Clientes"][0]["Estado"], "Por Vencer")
        self.assertEqual(filas_exportacion(date(2024, 3, 1))["Clientes"][0]["Estado"], "Vencido")

    def test_asignaciones_y_fotos(self):
        plantilla = PlantillaRutina.objects.create(Nombre="Full body")
        RutinaAsignada.objects.create(
            SocioID=self.socio,
            PlantillaID=plantilla,
            FechaInicio=date(2024, 2, 1),
            FechaFin=date(2024, 2, 5),
        )
        subir_foto(self.medicion.id, imagen_subida(), "frontal")

        hojas = filas_exportacion(self.hoy)

        asignacion = hojas["Asignaciones"][0]
        self.assertEqual(asignacion["Plantilla"], "Full body")
        self.assertEqual(asignacion["Estado"], "Completada")
        self.assertEqual(hojas["Fotos"][0]["Tipo Foto"], "Frontal")
        self.assertTrue(hojas["Fotos"][0]["URL"].startswith("/media/"))


class MensajeriaTest(AlmacenamientoEnMemoriaMixin, TestCase):
    def test_telefono_solo_digitos(self):
        self.assertEqual(telefono_whatsapp("+58 (412) 555-1234"), "584125551234")
        self.assertEqual(telefono_whatsapp(None), "")

    def test_datos_membresia(self):
        socio = crear_socio(fecha_inicio=date(2024, 1, 31))

        datos = datos_mensaje_membresia(socio, date(2024, 2, 26))

        self.assertEqual(datos["telefono"], "584121234567")
        self.assertEqual(datos["fecha_fin"], "29/02/2024")
        self.assertEqual(datos["dias_restantes"], 3)
        self.assertEqual(datos["estado"], "expiring")

    def test_datos_progreso(self):
        socio = crear_socio()
        inicio = Medicion.objects.create(SocioID=socio, Fecha=date(2024, 1, 1), Peso=Decimal("80"))
        fin = Medicion.objects.create(SocioID=socio, Fecha=date(2024, 3, 1), Peso=Decimal("82"))

        datos = datos_mensaje_progreso(comparar_mediciones(inicio.id, fin.id))

        self.assertEqual(datos["fecha_inicio"], "01/01/2024")
        self.assertEqual(datos["cambios"], [{"etiqueta": "Peso (kg)", "delta": "+2.0", "direccion": "up"}])
