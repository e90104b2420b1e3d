import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


def _medida():
    return models.DecimalField(blank=True, decimal_places=2, max_digits=6, null=True)


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Socio",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                (
                    "TipoDocumento",
                    models.CharField(
                        choices=[("V", "Venezolano"), ("E", "Extranjero")],
                        default="V",
                        max_length=1,
                    ),
                ),
                ("Cedula", models.CharField(max_length=20)),
                ("NombreCompleto", models.CharField(max_length=100)),
                ("Telefono", models.CharField(max_length=20)),
                ("FechaInicio", models.DateField()),
                (
                    "DuracionMeses",
                    models.PositiveSmallIntegerField(
                        validators=[
                            django.core.validators.MinValueValidator(1),
                            django.core.validators.MaxValueValidator(12),
                        ]
                    ),
                ),
                ("FechaFin", models.DateField()),
                ("FechaNacimiento", models.DateField(blank=True, null=True)),
                (
                    "PesoInicial",
                    models.DecimalField(blank=True, decimal_places=2, max_digits=5, null=True),
                ),
                (
                    "Altura",
                    models.DecimalField(
                        blank=True,
                        decimal_places=2,
                        help_text="Altura en centímetros",
                        max_digits=5,
                        null=True,
                    ),
                ),
                ("CreadoEn", models.DateTimeField(auto_now_add=True)),
                ("ActualizadoEn", models.DateTimeField(auto_now=True)),
            ],
            options={
                "db_table": "socio",
                "ordering": ["-CreadoEn", "-id"],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("TipoDocumento", "Cedula"), name="u_socio_documento"
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="CondicionMedica",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("TienePatologia", models.BooleanField(default=False)),
                ("DetallePatologia", models.TextField(blank=True, null=True)),
                ("TieneLesion", models.BooleanField(default=False)),
                ("DetalleLesion", models.TextField(blank=True, null=True)),
                ("TieneAlergias", models.BooleanField(default=False)),
                ("DetalleAlergias", models.TextField(blank=True, null=True)),
                (
                    "SocioID",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="condicion_medica",
                        to="socios.socio",
                    ),
                ),
            ],
            options={
                "db_table": "condicion_medica",
            },
        ),
        migrations.CreateModel(
            name="Medicion",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("Fecha", models.DateField()),
                ("Objetivo", models.TextField(blank=True, null=True)),
                ("Peso", _medida()),
                ("Hombros", _medida()),
                ("Pecho", _medida()),
                ("Espalda", _medida()),
                ("BicepsDer", _medida()),
                ("BicepsIzq", _medida()),
                ("Cintura", _medida()),
                ("Gluteo", _medida()),
                ("PiernaDer", _medida()),
                ("PiernaIzq", _medida()),
                ("PantorrillaDer", _medida()),
                ("PantorrillaIzq", _medida()),
                ("Notas", models.TextField(blank=True, null=True)),
                ("CreadoEn", models.DateTimeField(auto_now_add=True)),
                ("ActualizadoEn", models.DateTimeField(auto_now=True)),
                (
                    "SocioID",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="mediciones",
                        to="socios.socio",
                    ),
                ),
            ],
            options={
                "db_table": "medicion",
                "ordering": ["-Fecha", "-id"],
            },
        ),
        migrations.CreateModel(
            name="FotoProgreso",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                (
                    "TipoFoto",
                    models.CharField(
                        choices=[
                            ("frontal", "Frontal"),
                            ("lateral", "Lateral"),
                            ("posterior", "Posterior"),
                        ],
                        max_length=10,
                    ),
                ),
                ("RutaArchivo", models.CharField(max_length=255)),
                ("TipoContenido", models.CharField(max_length=50)),
                ("TamanoBytes", models.PositiveIntegerField(default=0)),
                ("CreadoEn", models.DateTimeField(auto_now_add=True)),
                ("ActualizadoEn", models.DateTimeField(auto_now=True)),
                (
                    "MedicionID",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="fotos",
                        to="socios.medicion",
                    ),
                ),
            ],
            options={
                "db_table": "foto_progreso",
                "ordering": ["MedicionID", "TipoFoto"],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("MedicionID", "TipoFoto"), name="u_foto_medicion_tipo"
                    )
                ],
            },
        ),
    ]
