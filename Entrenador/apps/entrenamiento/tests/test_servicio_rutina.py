from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import TestCase
from django.urls import reverse

from apps.entrenamiento.models import EjercicioRutina, PlantillaRutina
from apps.entrenamiento.servicios.rutinas_service import (
    agregar_ejercicio,
    crear_plantilla_rutina,
    ejercicios_por_dia,
    eliminar_foto_ejercicio,
    subir_foto_ejercicio,
    url_foto_ejercicio,
)
from apps.socios.excepciones import ArchivoInvalidoError, RegistroNoEncontradoError, ValidationError
from apps.socios.tests.utils import AlmacenamientoConFallos, AlmacenamientoEnMemoriaMixin, imagen_subida


class RutinaServicioTest(TestCase):
    def setUp(self):
        self.plantilla = crear_plantilla_rutina(
            nombre="Rutina Push-Pull-Legs",
            categoria="hipertrofia",
            dificultad="intermedio",
            duracion_semanas=6,
        )

    def test_crear_plantilla_exitosa(self):
        """
        Test: Crear plantilla de rutina exitosa
        """
        self.assertIsInstance(self.plantilla, PlantillaRutina)
        self.assertEqual(self.plantilla.Nombre, "Rutina Push-Pull-Legs")
        self.assertEqual(self.plantilla.DuracionSemanas, 6)
        self.assertIsNone(self.plantilla.Descripcion)

    def test_crear_plantilla_sin_nombre(self):
        """
        Test: No se puede crear rutina sin nombre
        """
        with self.assertRaises(ValidationError) as context:
            crear_plantilla_rutina(nombre="  ")

        self.assertIn("nombre de la rutina es obligatorio", str(context.exception))

    def test_crear_plantilla_categoria_invalida(self):
        with self.assertRaises(ValidationError):
            crear_plantilla_rutina(nombre="X", categoria="yoga")

    def test_agregar_ejercicio_exitoso(self):
        """
        Test: Agregar ejercicio a un día de la rutina
        """
        ejercicio = agregar_ejercicio(
            plantilla_id=self.plantilla.id,
            numero_dia=1,
            nombre_dia="Empuje",
            nombre_ejercicio="Press de Banca",
            series=4,
            repeticiones="8-10",
            descanso_segundos=90,
        )

        self.assertIsInstance(ejercicio, EjercicioRutina)
        self.assertEqual(ejercicio.Series, 4)
        self.assertEqual(ejercicio.Repeticiones, "8-10")
        self.assertEqual(ejercicio.Orden, 0)

    def test_agregar_ejercicio_series_invalidas(self):
        """
        Test: No se puede agregar ejercicio con series no positivas
        """
        with self.assertRaises(ValidationError) as context:
            agregar_ejercicio(self.plantilla.id, 1, "Empuje", "Press", series=0, repeticiones="10")

        self.assertIn("series deben ser un número positivo", str(context.exception))

    def test_agregar_ejercicio_descanso_negativo(self):
        with self.assertRaises(ValidationError) as context:
            agregar_ejercicio(
                self.plantilla.id, 1, "Empuje", "Press", series=3, repeticiones="10", descanso_segundos=-5
            )

        self.assertIn("descanso no puede ser negativo", str(context.exception))

    def test_agregar_ejercicio_dia_invalido(self):
        """
        Test: El día debe estar entre 1 y 7
        """
        for dia in (0, 8, "1"):
            with self.subTest(dia=dia):
                with self.assertRaises(ValidationError):
                    agregar_ejercicio(self.plantilla.id, dia, "Día", "Press", series=3, repeticiones="10")

    def test_agregar_ejercicio_rutina_inexistente(self):
        with self.assertRaises(RegistroNoEncontradoError):
            agregar_ejercicio(99999, 1, "Día", "Press", series=3, repeticiones="10")

    def test_ejercicios_por_dia(self):
        """
        Test: Los ejercicios se agrupan por día y respetan el orden
        """
        agregar_ejercicio(self.plantilla.id, 2, "Tirón", "Remo", series=4, repeticiones="10")
        agregar_ejercicio(self.plantilla.id, 1, "Empuje", "Press de Banca", series=4, repeticiones="8")
        agregar_ejercicio(self.plantilla.id, 1, "Empuje", "Fondos", series=3, repeticiones="12")

        dias = ejercicios_por_dia(self.plantilla.id)

        self.assertEqual([d["numero_dia"] for d in dias], [1, 2])
        self.assertEqual(dias[0]["nombre_dia"], "Empuje")
        self.assertEqual(
            [e.NombreEjercicio for e in dias[0]["ejercicios"]], ["Press de Banca", "Fondos"]
        )


class FotoEjercicioTest(AlmacenamientoEnMemoriaMixin, TestCase):
    almacenamiento_cls = AlmacenamientoConFallos

    def setUp(self):
        super().setUp()
        plantilla = crear_plantilla_rutina(nombre="Fuerza")
        self.ejercicio = agregar_ejercicio(plantilla.id, 1, "Pierna", "Sentadilla", series=5, repeticiones="5")

    def test_subir_y_reemplazar_foto(self):
        resultado = subir_foto_ejercicio(self.ejercicio.id, imagen_subida())
        ruta_anterior = resultado.valor.RutaFoto
        self.assertTrue(resultado.completo)
        self.assertEqual(ruta_anterior, f"ejercicios/{self.ejercicio.id}.jpg")

        ejercicio = subir_foto_ejercicio(self.ejercicio.id, imagen_subida("b.png", "PNG", "image/png")).valor

        self.assertFalse(self.almacenamiento.exists(ruta_anterior))
        self.assertTrue(self.almacenamiento.exists(ejercicio.RutaFoto))
        self.assertEqual(url_foto_ejercicio(ejercicio), self.almacenamiento.url(ejercicio.RutaFoto))

    def test_fallo_al_borrar_la_anterior_es_advertencia(self):
        """
        Test: un fallo del almacenamiento al reemplazar no aborta la subida
        """
        ruta_anterior = subir_foto_ejercicio(self.ejercicio.id, imagen_subida()).valor.RutaFoto
        self.almacenamiento.rutas_que_fallan.add(ruta_anterior)

        resultado = subir_foto_ejercicio(self.ejercicio.id, imagen_subida())

        self.assertEqual([a.operacion for a in resultado.advertencias], ["reemplazar_foto_ejercicio"])
        self.ejercicio.refresh_from_db()
        self.assertEqual(self.ejercicio.RutaFoto, resultado.valor.RutaFoto)
        self.assertNotEqual(self.ejercicio.RutaFoto, ruta_anterior)
        self.assertTrue(self.almacenamiento.exists(self.ejercicio.RutaFoto))

    def test_webp_no_permitido_para_ejercicios(self):
        with self.assertRaises(ArchivoInvalidoError):
            subir_foto_ejercicio(self.ejercicio.id, imagen_subida("a.webp", "WEBP", "image/webp"))

    def test_limite_de_tamano(self):
        grande = SimpleUploadedFile("g.jpg", b"0" * (3 * 1024 * 1024 + 1), content_type="image/jpeg")
        with self.assertRaises(ArchivoInvalidoError) as context:
            subir_foto_ejercicio(self.ejercicio.id, grande)
        self.assertIn("3 MB", str(context.exception))

    def test_eliminar_foto(self):
        ruta = subir_foto_ejercicio(self.ejercicio.id, imagen_subida()).valor.RutaFoto

        resultado = eliminar_foto_ejercicio(self.ejercicio.id)

        self.assertTrue(resultado.completo)
        self.assertIsNone(resultado.valor.RutaFoto)
        self.assertIsNone(url_foto_ejercicio(resultado.valor))
        self.assertFalse(self.almacenamiento.exists(ruta))

    def test_eliminar_foto_con_almacenamiento_caido(self):
        ruta = subir_foto_ejercicio(self.ejercicio.id, imagen_subida()).valor.RutaFoto
        self.almacenamiento.rutas_que_fallan.add(ruta)

        resultado = eliminar_foto_ejercicio(self.ejercicio.id)

        self.assertEqual(len(resultado.advertencias), 1)
        self.ejercicio.refresh_from_db()
        self.assertIsNone(self.ejercicio.RutaFoto)

    def test_detalle_de_rutina_incluye_foto(self):
        subir_foto_ejercicio(self.ejercicio.id, imagen_subida())

        response = self.client.get(reverse("rutina_detalle", args=[self.ejercicio.PlantillaRutinaID_id]))

        ejercicio = response.json()["dias"][0]["ejercicios"][0]
        self.assertEqual(ejercicio["nombre"], "Sentadilla")
        self.assertTrue(ejercicio["foto"].startswith("/media/ejercicios/"))

    def test_vista_de_foto_devuelve_advertencias(self):
        response = self.client.post(
            reverse("foto_ejercicio", args=[self.ejercicio.id]), {"foto": imagen_subida()}
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["advertencias"], [])
        self.assertTrue(response.json()["foto"].startswith("/media/ejercicios/"))
