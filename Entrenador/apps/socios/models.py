from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models


# Campos numéricos de una medición, en el orden en que se reportan:
# (clave externa, atributo del modelo, etiqueta)
CAMPOS_MEDIDAS = [
    ("peso", "Peso", "Peso (kg)"),
    ("hombros", "Hombros", "Hombros (cm)"),
    ("pecho", "Pecho", "Pecho (cm)"),
    ("espalda", "Espalda", "Espalda (cm)"),
    ("biceps_der", "BicepsDer", "Bíceps Der (cm)"),
    ("biceps_izq", "BicepsIzq", "Bíceps Izq (cm)"),
    ("cintura", "Cintura", "Cintura (cm)"),
    ("gluteo", "Gluteo", "Glúteo (cm)"),
    ("pierna_der", "PiernaDer", "Pierna Der (cm)"),
    ("pierna_izq", "PiernaIzq", "Pierna Izq (cm)"),
    ("pantorrilla_der", "PantorrillaDer", "Pantorrilla Der (cm)"),
    ("pantorrilla_izq", "PantorrillaIzq", "Pantorrilla Izq (cm)"),
]


def _medida():
    return models.DecimalField(max_digits=6, decimal_places=2, null=True, blank=True)


# === TABLA Socio ===
class Socio(models.Model):
    DOCUMENTO_VENEZOLANO = "V"
    DOCUMENTO_EXTRANJERO = "E"
    DOCUMENTO_CHOICES = [
        (DOCUMENTO_VENEZOLANO, "Venezolano"),
        (DOCUMENTO_EXTRANJERO, "Extranjero"),
    ]

    ESTADO_ACTIVO = "active"
    ESTADO_POR_VENCER = "expiring"
    ESTADO_VENCIDO = "expired"

    TipoDocumento = models.CharField(max_length=1, choices=DOCUMENTO_CHOICES, default=DOCUMENTO_VENEZOLANO)
    Cedula = models.CharField(max_length=20)
    NombreCompleto = models.CharField(max_length=100)
    Telefono = models.CharField(max_length=20)

    FechaInicio = models.DateField()
    DuracionMeses = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(12)]
    )
    FechaFin = models.DateField()

    FechaNacimiento = models.DateField(null=True, blank=True)
    PesoInicial = models.DecimalField(max_digits=5, decimal_places=2, null=True, blank=True)
    Altura = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        null=True,
        blank=True,
        help_text="Altura en centímetros",
    )

    CreadoEn = models.DateTimeField(auto_now_add=True)
    ActualizadoEn = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.NombreCompleto} ({self.documento})"

    @property
    def documento(self):
        return f"{self.TipoDocumento}-{self.Cedula}"

    def estado(self, hoy):
        from apps.socios.servicios.membresia_service import derivar_estado

        return derivar_estado(self.FechaFin, hoy)

    def dias_restantes(self, hoy):
        from apps.socios.servicios.calendario import dias_restantes

        return dias_restantes(self.FechaFin, hoy)

    class Meta:
        db_table = "socio"
        ordering = ["-CreadoEn", "-id"]
        constraints = [
            models.UniqueConstraint(fields=["TipoDocumento", "Cedula"], name="u_socio_documento")
        ]


# === TABLA CondicionMedica ===
class CondicionMedica(models.Model):
    SocioID = models.OneToOneField(Socio, on_delete=models.CASCADE, related_name="condicion_medica")

    TienePatologia = models.BooleanField(default=False)
    DetallePatologia = models.TextField(null=True, blank=True)
    TieneLesion = models.BooleanField(default=False)
    DetalleLesion = models.TextField(null=True, blank=True)
    TieneAlergias = models.BooleanField(default=False)
    DetalleAlergias = models.TextField(null=True, blank=True)

    def __str__(self):
        return f"Condición médica de {self.SocioID.NombreCompleto}"

    def tiene_alguna(self):
        return self.TienePatologia or self.TieneLesion or self.TieneAlergias

    class Meta:
        db_table = "condicion_medica"


# === TABLA Medicion ===
class Medicion(models.Model):
    SocioID = models.ForeignKey(Socio, on_delete=models.CASCADE, related_name="mediciones")

    Fecha = models.DateField()
    Objetivo = models.TextField(null=True, blank=True)

    Peso = _medida()
    Hombros = _medida()
    Pecho = _medida()
    Espalda = _medida()
    BicepsDer = _medida()
    BicepsIzq = _medida()
    Cintura = _medida()
    Gluteo = _medida()
    PiernaDer = _medida()
    PiernaIzq = _medida()
    PantorrillaDer = _medida()
    PantorrillaIzq = _medida()

    Notas = models.TextField(null=True, blank=True)

    CreadoEn = models.DateTimeField(auto_now_add=True)
    ActualizadoEn = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"Medición {self.id} de {self.SocioID.NombreCompleto} ({self.Fecha})"

    def valores(self):
        """Diccionario clave -> valor de las doce medidas (None si no se registró)."""
        return {clave: getattr(self, atributo) for clave, atributo, _ in CAMPOS_MEDIDAS}

    class Meta:
        db_table = "medicion"
        # Fecha descendente; a igual fecha, la registrada después va primero
        ordering = ["-Fecha", "-id"]


# === TABLA FotoProgreso ===
class FotoProgreso(models.Model):
    TIPO_FRONTAL = "frontal"
    TIPO_LATERAL = "lateral"
    TIPO_POSTERIOR = "posterior"
    TIPO_CHOICES = [
        (TIPO_FRONTAL, "Frontal"),
        (TIPO_LATERAL, "Lateral"),
        (TIPO_POSTERIOR, "Posterior"),
    ]
    TIPOS = [TIPO_FRONTAL, TIPO_LATERAL, TIPO_POSTERIOR]

    MedicionID = models.ForeignKey(Medicion, on_delete=models.CASCADE, related_name="fotos")
    TipoFoto = models.CharField(max_length=10, choices=TIPO_CHOICES)

    RutaArchivo = models.CharField(max_length=255)
    TipoContenido = models.CharField(max_length=50)
    TamanoBytes = models.PositiveIntegerField(default=0)

    CreadoEn = models.DateTimeField(auto_now_add=True)
    ActualizadoEn = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"Foto {self.TipoFoto} - Medición {self.MedicionID_id}"

    class Meta:
        db_table = "foto_progreso"
        ordering = ["MedicionID", "TipoFoto"]
        constraints = [
            models.UniqueConstraint(fields=["MedicionID", "TipoFoto"], name="u_foto_medicion_tipo")
        ]
