import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


def _id():
    return models.BigAutoField(
        auto_created=True,
        primary_key=True,
        serialize=False,
        verbose_name="ID",
    )


def _campos_asignacion():
    return [
        ("id", _id()),
        ("FechaAsignacion", models.DateField(default=django.utils.timezone.localdate)),
        ("FechaInicio", models.DateField()),
        ("FechaFin", models.DateField()),
        ("Notas", models.TextField(blank=True, null=True)),
        ("Pausada", models.BooleanField(default=False)),
        ("CreadoEn", models.DateTimeField(auto_now_add=True)),
        ("ActualizadoEn", models.DateTimeField(auto_now=True)),
    ]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("socios", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="PlantillaRutina",
            fields=[
                ("id", _id()),
                ("Nombre", models.CharField(max_length=120)),
                ("Descripcion", models.TextField(blank=True, null=True)),
                (
                    "Categoria",
                    models.CharField(
                        blank=True,
                        choices=[
                            ("hipertrofia", "Hipertrofia"),
                            ("fuerza", "Fuerza"),
                            ("resistencia", "Resistencia"),
                            ("perdida_peso", "Pérdida de peso"),
                            ("otro", "Otro"),
                        ],
                        max_length=20,
                        null=True,
                    ),
                ),
                (
                    "Dificultad",
                    models.CharField(
                        blank=True,
                        choices=[
                            ("principiante", "Principiante"),
                            ("intermedio", "Intermedio"),
                            ("avanzado", "Avanzado"),
                        ],
                        max_length=20,
                        null=True,
                    ),
                ),
                (
                    "DuracionSemanas",
                    models.PositiveSmallIntegerField(
                        default=4,
                        validators=[django.core.validators.MinValueValidator(1)],
                    ),
                ),
                ("CreadoEn", models.DateTimeField(auto_now_add=True)),
                ("ActualizadoEn", models.DateTimeField(auto_now=True)),
            ],
            options={
                "db_table": "plantilla_rutina",
                "ordering": ["Nombre"],
            },
        ),
        migrations.CreateModel(
            name="EjercicioRutina",
            fields=[
                ("id", _id()),
                (
                    "NumeroDia",
                    models.PositiveSmallIntegerField(
                        validators=[
                            django.core.validators.MinValueValidator(1),
                            django.core.validators.MaxValueValidator(7),
                        ]
                    ),
                ),
                ("NombreDia", models.CharField(max_length=50)),
                ("NombreEjercicio", models.CharField(max_length=120)),
                (
                    "Series",
                    models.PositiveSmallIntegerField(
                        validators=[django.core.validators.MinValueValidator(1)]
                    ),
                ),
                ("Repeticiones", models.CharField(help_text="Ej: 12 o 8-10", max_length=20)),
                ("DescansoSegundos", models.PositiveIntegerField(default=60)),
                ("Notas", models.TextField(blank=True, null=True)),
                ("RutaFoto", models.CharField(blank=True, max_length=255, null=True)),
                ("Orden", models.PositiveIntegerField(default=0)),
                ("CreadoEn", models.DateTimeField(auto_now_add=True)),
                (
                    "PlantillaRutinaID",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="ejercicios",
                        to="entrenamiento.plantillarutina",
                    ),
                ),
            ],
            options={
                "db_table": "ejercicio_rutina",
                "ordering": ["PlantillaRutinaID", "NumeroDia", "Orden", "id"],
            },
        ),
        migrations.CreateModel(
            name="PlantillaNutricional",
            fields=[
                ("id", _id()),
                ("Nombre", models.CharField(max_length=120)),
                ("Descripcion", models.TextField(blank=True, null=True)),
                (
                    "Objetivo",
                    models.CharField(
                        blank=True,
                        choices=[
                            ("volumen", "Volumen"),
                            ("definicion", "Definición"),
                            ("mantenimiento", "Mantenimiento"),
                            ("perdida_peso", "Pérdida de peso"),
                        ],
                        max_length=20,
                        null=True,
                    ),
                ),
                ("CaloriasDiarias", models.PositiveIntegerField(blank=True, null=True)),
                ("ProteinaG", models.PositiveIntegerField(blank=True, null=True)),
                ("CarbohidratosG", models.PositiveIntegerField(blank=True, null=True)),
                ("GrasasG", models.PositiveIntegerField(blank=True, null=True)),
                ("CreadoEn", models.DateTimeField(auto_now_add=True)),
                ("ActualizadoEn", models.DateTimeField(auto_now=True)),
            ],
            options={
                "db_table": "plantilla_nutricional",
                "ordering": ["Nombre"],
            },
        ),
        migrations.CreateModel(
            name="RutinaAsignada",
            fields=_campos_asignacion()
            + [
                (
                    "SocioID",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="rutinas_asignadas",
                        to="socios.socio",
                    ),
                ),
                (
                    "PlantillaID",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="asignaciones",
                        to="entrenamiento.plantillarutina",
                    ),
                ),
            ],
            options={
                "db_table": "rutina_asignada",
                "ordering": ["-FechaInicio", "-id"],
                "abstract": False,
            },
        ),
        migrations.CreateModel(
            name="PlanNutricionalAsignado",
            fields=_campos_asignacion()
            + [
                (
                    "SocioID",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="planes_asignados",
                        to="socios.socio",
                    ),
                ),
                (
                    "PlantillaID",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="asignaciones",
                        to="entrenamiento.plantillanutricional",
                    ),
                ),
            ],
            options={
                "db_table": "plan_nutricional_asignado",
                "ordering": ["-FechaInicio", "-id"],
                "abstract": False,
            },
        ),
    ]
