from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.utils import timezone


# === TABLA PlantillaRutina ===
class PlantillaRutina(models.Model):
    CATEGORIA_CHOICES = [
        ("hipertrofia", "Hipertrofia"),
        ("fuerza", "Fuerza"),
        ("resistencia", "Resistencia"),
        ("perdida_peso", "Pérdida de peso"),
        ("otro", "Otro"),
    ]
    DIFICULTAD_CHOICES = [
        ("principiante", "Principiante"),
        ("intermedio", "Intermedio"),
        ("avanzado", "Avanzado"),
    ]

    Nombre = models.CharField(max_length=120)
    Descripcion = models.TextField(null=True, blank=True)
    Categoria = models.CharField(max_length=20, choices=CATEGORIA_CHOICES, null=True, blank=True)
    Dificultad = models.CharField(max_length=20, choices=DIFICULTAD_CHOICES, null=True, blank=True)
    DuracionSemanas = models.PositiveSmallIntegerField(default=4, validators=[MinValueValidator(1)])

    CreadoEn = models.DateTimeField(auto_now_add=True)
    ActualizadoEn = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.Nombre

    class Meta:
        ordering = ["Nombre"]
        db_table = "plantilla_rutina"


# === TABLA EjercicioRutina ===
class EjercicioRutina(models.Model):
    PlantillaRutinaID = models.ForeignKey(PlantillaRutina, on_delete=models.CASCADE, related_name="ejercicios")

    NumeroDia = models.PositiveSmallIntegerField(validators=[MinValueValidator(1), MaxValueValidator(7)])
    NombreDia = models.CharField(max_length=50)
    NombreEjercicio = models.CharField(max_length=120)
    Series = models.PositiveSmallIntegerField(validators=[MinValueValidator(1)])
    Repeticiones = models.CharField(max_length=20, help_text="Ej: 12 o 8-10")
    DescansoSegundos = models.PositiveIntegerField(default=60)
    Notas = models.TextField(null=True, blank=True)
    # Ruta del objeto en el almacenamiento; la URL se calcula al leer
    RutaFoto = models.CharField(max_length=255, null=True, blank=True)
    Orden = models.PositiveIntegerField(default=0)

    CreadoEn = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f"{self.NombreEjercicio} (día {self.NumeroDia})"

    class Meta:
        db_table = "ejercicio_rutina"
        ordering = ["PlantillaRutinaID", "NumeroDia", "Orden", "id"]


# === TABLA PlantillaNutricional ===
class PlantillaNutricional(models.Model):
    OBJETIVO_CHOICES = [
        ("volumen", "Volumen"),
        ("definicion", "Definición"),
        ("mantenimiento", "Mantenimiento"),
        ("perdida_peso", "Pérdida de peso"),
    ]

    Nombre = models.CharField(max_length=120)
    Descripcion = models.TextField(null=True, blank=True)
    Objetivo = models.CharField(max_length=20, choices=OBJETIVO_CHOICES, null=True, blank=True)
    CaloriasDiarias = models.PositiveIntegerField(null=True, blank=True)
    ProteinaG = models.PositiveIntegerField(null=True, blank=True)
    CarbohidratosG = models.PositiveIntegerField(null=True, blank=True)
    GrasasG = models.PositiveIntegerField(null=True, blank=True)

    CreadoEn = models.DateTimeField(auto_now_add=True)
    ActualizadoEn = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.Nombre

    class Meta:
        ordering = ["Nombre"]
        db_table = "plantilla_nutricional"


class AsignacionBase(models.Model):
    """Vínculo cliente-plantilla con su propia ventana [FechaInicio, FechaFin]."""

    ESTADO_ACTIVO = "active"
    ESTADO_COMPLETADO = "completed"
    ESTADO_PAUSADO = "paused"

    FechaAsignacion = models.DateField(default=timezone.localdate)
    FechaInicio = models.DateField()
    FechaFin = models.DateField()
    Notas = models.TextField(null=True, blank=True)
    Pausada = models.BooleanField(default=False)

    CreadoEn = models.DateTimeField(auto_now_add=True)
    ActualizadoEn = models.DateTimeField(auto_now=True)

    def estado(self, hoy):
        from apps.entrenamiento.servicios.asignaciones_service import derivar_estado_asignacion

        return derivar_estado_asignacion(self.FechaInicio, self.FechaFin, self.Pausada, hoy)

    class Meta:
        abstract = True
        ordering = ["-FechaInicio", "-id"]


# === TABLA RutinaAsignada ===
class RutinaAsignada(AsignacionBase):
    SocioID = models.ForeignKey("socios.Socio", on_delete=models.CASCADE, related_name="rutinas_asignadas")
    # Las plantillas se reutilizan: desasignar nunca borra la plantilla
    PlantillaID = models.ForeignKey(PlantillaRutina, on_delete=models.PROTECT, related_name="asignaciones")

    def __str__(self):
        return f"{self.PlantillaID.Nombre} -> {self.SocioID.NombreCompleto}"

    class Meta(AsignacionBase.Meta):
        db_table = "rutina_asignada"


# === TABLA PlanNutricionalAsignado ===
class PlanNutricionalAsignado(AsignacionBase):
    SocioID = models.ForeignKey("socios.Socio", on_delete=models.CASCADE, related_name="planes_asignados")
    PlantillaID = models.ForeignKey(PlantillaNutricional, on_delete=models.PROTECT, related_name="asignaciones")

    def __str__(self):
        return f"{self.PlantillaID.Nombre} -> {self.SocioID.NombreCompleto}"

    class Meta(AsignacionBase.Meta):
        db_table = "plan_nutricional_asignado"
