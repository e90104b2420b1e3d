import json
from datetime import date

from django.db.models import ProtectedError
from django.test import TestCase
from django.urls import reverse

from apps.entrenamiento.models import (
    PlanNutricionalAsignado,
    PlantillaNutricional,
    PlantillaRutina,
    RutinaAsignada,
)
from apps.entrenamiento.servicios.asignaciones_service import (
    actualizar_asignacion,
    asignacion_vigente,
    asignar_plantilla,
    derivar_estado_asignacion,
    desasignar,
    listar_asignaciones,
    pausar_asignacion,
    reanudar_asignacion,
)
from apps.socios.excepciones import RegistroNoEncontradoError, ValidationError
from apps.socios.tests.utils import crear_socio


class DerivarEstadoAsignacionTest(TestCase):
    def test_estados(self):
        inicio, fin = date(2024, 3, 1), date(2024, 3, 31)

        self.assertEqual(derivar_estado_asignacion(inicio, fin, False, date(2024, 3, 15)), "active")
        self.assertEqual(derivar_estado_asignacion(inicio, fin, False, date(2024, 3, 31)), "active")
        self.assertEqual(derivar_estado_asignacion(inicio, fin, False, date(2024, 4, 1)), "completed")
        self.assertEqual(derivar_estado_asignacion(inicio, fin, True, date(2024, 3, 15)), "paused")
        self.assertEqual(derivar_estado_asignacion(inicio, fin, True, date(2024, 4, 1)), "paused")

    def test_antes_del_inicio_cuenta_como_activa(self):
        self.assertEqual(
            derivar_estado_asignacion(date(2024, 3, 1), date(2024, 3, 31), False, date(2024, 2, 20)),
            "active",
        )


class AsignacionServicioTest(TestCase):
    def setUp(self):
        self.socio = crear_socio()
        self.rutina = PlantillaRutina.objects.create(Nombre="Push Pull Legs")
        self.plan = PlantillaNutricional.objects.create(Nombre="Déficit suave", CaloriasDiarias=1900)
        self.hoy = date(2024, 3, 15)

    def test_asignar_rutina(self):
        asignacion = asignar_plantilla("rutina", self.socio.id, self.rutina.id, "2024-03-01", "2024-03-31", "  ")

        self.assertIsInstance(asignacion, RutinaAsignada)
        self.assertEqual(asignacion.FechaInicio, date(2024, 3, 1))
        self.assertIsNone(asignacion.Notas)
        self.assertEqual(asignacion.estado(self.hoy), "active")

    def test_asignar_plan_nutricional(self):
        asignacion = asignar_plantilla("nutricion", self.socio.id, self.plan.id, "2024-03-01", "2024-04-30")
        self.assertIsInstance(asignacion, PlanNutricionalAsignado)

    def test_fechas_invertidas(self):
        with self.assertRaises(ValidationError) as context:
            asignar_plantilla("rutina", self.socio.id, self.rutina.id, "2024-03-31", "2024-03-01")
        self.assertIn("no puede ser anterior", str(context.exception))

    def test_tipo_invalido(self):
        with self.assertRaises(ValidationError):
            asignar_plantilla("cardio", self.socio.id, self.rutina.id, "2024-03-01", "2024-03-31")

    def test_plantilla_o_cliente_inexistente(self):
        with self.assertRaises(RegistroNoEncontradoError):
            asignar_plantilla("rutina", self.socio.id, 99999, "2024-03-01", "2024-03-31")
        with self.assertRaises(RegistroNoEncontradoError):
            asignar_plantilla("rutina", 99999, self.rutina.id, "2024-03-01", "2024-03-31")

    def test_nueva_asignacion_no_cierra_la_anterior(self):
        """
        Test: asignar otra rutina deja ambas; la vigente es la más reciente
        """
        anterior = asignar_plantilla("rutina", self.socio.id, self.rutina.id, "2024-03-01", "2024-03-31")
        otra = PlantillaRutina.objects.create(Nombre="Fuerza 5x5")
        nueva = asignar_plantilla("rutina", self.socio.id, otra.id, "2024-03-10", "2024-04-10")

        filas = listar_asignaciones("rutina", self.socio.id, self.hoy)

        self.assertEqual([a.id for a, _ in filas], [nueva.id, anterior.id])
        self.assertEqual([estado for _, estado in filas], ["active", "active"])
        self.assertEqual(asignacion_vigente("rutina", self.socio.id, self.hoy).id, nueva.id)

    def test_misma_fecha_de_inicio_gana_la_ultima_creada(self):
        primera = asignar_plantilla("rutina", self.socio.id, self.rutina.id, "2024-03-01", "2024-03-31")
        segunda = asignar_plantilla("rutina", self.socio.id, self.rutina.id, "2024-03-01", "2024-03-31")

        self.assertEqual(asignacion_vigente("rutina", self.socio.id, self.hoy).id, segunda.id)
        self.assertNotEqual(primera.id, segunda.id)

    def test_vigente_ignora_pausadas_y_completadas(self):
        completada = asignar_plantilla("rutina", self.socio.id, self.rutina.id, "2024-01-01", "2024-02-01")
        pausada = asignar_plantilla("rutina", self.socio.id, self.rutina.id, "2024-03-05", "2024-04-05")
        pausar_asignacion("rutina", pausada.id)

        self.assertIsNone(asignacion_vigente("rutina", self.socio.id, self.hoy))
        self.assertEqual(completada.estado(self.hoy), "completed")

        reanudar_asignacion("rutina", pausada.id)
        self.assertEqual(asignacion_vigente("rutina", self.socio.id, self.hoy).id, pausada.id)

    def test_actualizar_asignacion(self):
        asignacion = asignar_plantilla("rutina", self.socio.id, self.rutina.id, "2024-03-01", "2024-03-31")

        asignacion = actualizar_asignacion("rutina", asignacion.id, fecha_fin="2024-03-10", notas="Semana de descarga")

        self.assertEqual(asignacion.FechaFin, date(2024, 3, 10))
        self.assertEqual(asignacion.Notas, "Semana de descarga")
        self.assertEqual(asignacion.estado(self.hoy), "completed")

    def test_desasignar_no_borra_la_plantilla(self):
        asignacion = asignar_plantilla("rutina", self.socio.id, self.rutina.id, "2024-03-01", "2024-03-31")

        desasignar("rutina", asignacion.id)

        self.assertFalse(RutinaAsignada.objects.exists())
        self.assertTrue(PlantillaRutina.objects.filter(id=self.rutina.id).exists())

    def test_plantilla_en_uso_no_se_puede_borrar(self):
        asignar_plantilla("nutricion", self.socio.id, self.plan.id, "2024-03-01", "2024-03-31")
        with self.assertRaises(ProtectedError):
            self.plan.delete()

    def test_borrar_cliente_borra_sus_asignaciones(self):
        asignar_plantilla("rutina", self.socio.id, self.rutina.id, "2024-03-01", "2024-03-31")
        self.socio.delete()
        self.assertFalse(RutinaAsignada.objects.exists())
        self.assertTrue(PlantillaRutina.objects.exists())


class AsignacionesViewTest(TestCase):
    def setUp(self):
        self.socio = crear_socio()
        self.rutina = PlantillaRutina.objects.create(Nombre="Full body")

    def test_asignar_y_listar(self):
        response = self.client.post(
            reverse("asignar", args=["rutina"]),
            data=json.dumps(
                {
                    "socio_id": self.socio.id,
                    "plantilla_id": self.rutina.id,
                    "fecha_inicio": "2024-03-01",
                    "fecha_fin": "2099-03-31",
                }
            ),
            content_type="application/json",
        )
        self.assertEqual(response.status_code, 201)
        asignacion_id = response.json()["id"]

        response = self.client.get(reverse("asignaciones_cliente", args=[self.socio.id, "rutina"]))
        self.assertEqual(response.json()["vigente_id"], asignacion_id)

    def test_pausar_y_desasignar(self):
        asignacion = asignar_plantilla("rutina", self.socio.id, self.rutina.id, "2024-03-01", "2099-03-31")

        response = self.client.post(reverse("accion_asignacion", args=["rutina", asignacion.id, "pausar"]))
        self.assertEqual(response.json()["estado"], "paused")

        response = self.client.post(reverse("accion_asignacion", args=["rutina", asignacion.id, "desasignar"]))
        self.assertTrue(response.json()["success"])
        self.assertFalse(RutinaAsignada.objects.exists())

    def test_accion_desconocida(self):
        asignacion = asignar_plantilla("rutina", self.socio.id, self.rutina.id, "2024-03-01", "2099-03-31")
        response = self.client.post(reverse("accion_asignacion", args=["rutina", asignacion.id, "borrar"]))
        self.assertEqual(response.status_code, 400)

    def test_ids_no_numericos_responden_400(self):
        for datos in ({"socio_id": "abc", "plantilla_id": self.rutina.id}, {"socio_id": self.socio.id}):
            with self.subTest(datos=datos):
                response = self.client.post(
                    reverse("asignar", args=["rutina"]),
                    data=json.dumps(dict(datos, fecha_inicio="2024-03-01", fecha_fin="2024-03-31")),
                    content_type="application/json",
                )
                self.assertEqual(response.status_code, 400)
        self.assertFalse(RutinaAsignada.objects.exists())
