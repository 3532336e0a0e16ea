from django.db import models

from . import optimizer

PREFIJO_INFANTIL = 'NEI'


def nombre_es_infantil(nombre):
    return (nombre or '').strip().upper().startswith(PREFIJO_INFANTIL)


class Escuela(models.Model):
    nombre = models.CharField(max_length=255)
    latitud = models.DecimalField(max_digits=9, decimal_places=6)
    longitud = models.DecimalField(max_digits=9, decimal_places=6)
    # None = sin indicar; al crear se deduce del nombre
    es_infantil = models.BooleanField(
        null=True,
        default=None,
        help_text='Escuela de educación infantil (tope de viaje reducido).',
    )

    def save(self, *args, **kwargs):
        # si nadie lo indicó, los "NEI ..." quedan marcados como infantiles
        if self.es_infantil is None:
            self.es_infantil = nombre_es_infantil(self.nombre)
        super().save(*args, **kwargs)

    def __str__(self):
        return self.nombre


class Punto(models.Model):
    class Estado(models.TextChoices):
        ACTIVO = 'activo', 'Activo'
        INACTIVO = 'inactivo', 'Inactivo'

    nombre = models.CharField(max_length=255, blank=True)
    latitud = models.DecimalField(max_digits=9, decimal_places=6)
    longitud = models.DecimalField(max_digits=9, decimal_places=6)
    estado = models.CharField(max_length=10, choices=Estado.choices, default=Estado.ACTIVO)

    def __str__(self):
        return self.nombre or f'Punto {self.pk}'


class Zona(models.Model):
    nombre = models.CharField(max_length=255)
    escuelas = models.ManyToManyField(Escuela, related_name='zonas', blank=True)
    puntos = models.ManyToManyField(Punto, related_name='zonas', blank=True)

    def __str__(self):
        return self.nombre


class Estudiante(models.Model):
    nombre = models.CharField(max_length=255)
    punto = models.ForeignKey(
        Punto, null=True, blank=True, on_delete=models.SET_NULL, related_name='estudiantes'
    )
    # cualquier valor no nulo cuenta como deficiencia
    deficiencia = models.CharField(max_length=255, null=True, blank=True)

    def __str__(self):
        return self.nombre


class RutaInteligente(models.Model):
    TIPO_CHOICES = [
        (optimizer.TIPO_NORMAL, 'Normal'),
        (optimizer.TIPO_INFANTIL, 'Infantil'),
        (optimizer.TIPO_ESPECIAL, 'Especial'),
    ]
    VEHICULO_CHOICES = [
        (optimizer.VEHICULO_VAN, 'Van'),
        (optimizer.VEHICULO_MICROONIBUS, 'Microônibus'),
        (optimizer.VEHICULO_ONIBUS, 'Ônibus'),
    ]

    identificador = models.CharField(max_length=50)
    tipo = models.CharField(max_length=10, choices=TIPO_CHOICES)
    turno = models.CharField(max_length=20, blank=True)
    vehiculo = models.CharField(max_length=15, choices=VEHICULO_CHOICES)
    capacidad = models.PositiveIntegerField()
    orden_puntos = models.JSONField(default=list)
    duracion_min = models.FloatField()
    distancia_km = models.FloatField()
    zona = models.ForeignKey(
        Zona, null=True, blank=True, on_delete=models.SET_NULL, related_name='rutas'
    )
    escuelas = models.ManyToManyField(Escuela, related_name='rutas_inteligentes', blank=True)
    estudiantes = models.ManyToManyField(Estudiante, related_name='rutas_inteligentes', blank=True)
    creado_en = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-creado_en', '-id']

    def __str__(self):
        return self.identificador

    def como_dict(self):
        """Resumen JSON usado por el listado."""
        return {
            'id': self.id,
            'identificador': self.identificador,
            'tipo': self.tipo,
            'turno': self.turno,
            'vehiculo': self.vehiculo,
            'capacidad': self.capacidad,
            'duracion_min': optimizer.redondear_minutos(self.duracion_min),
            'distancia_km': round(self.distancia_km, 2),
            'orden_puntos': self.orden_puntos,
            'escuelas': sorted(e.id for e in self.escuelas.all()),
            'zona_id': self.zona_id,
            'creado_en': self.creado_en.isoformat(),
        }


class ParadaRuta(models.Model):
    ruta = models.ForeignKey(RutaInteligente, on_delete=models.CASCADE, related_name='paradas')
    punto = models.ForeignKey(Punto, on_delete=models.PROTECT, related_name='paradas')
    orden = models.PositiveIntegerField()  # empieza en 1

    class Meta:
        ordering = ['ruta', 'orden']
        constraints = [
            models.UniqueConstraint(fields=['ruta', 'punto'], name='parada_unica_por_ruta'),
            models.UniqueConstraint(fields=['ruta', 'orden'], name='orden_unico_por_ruta'),
        ]

    def __str__(self):
        return f'{self.ruta} #{self.orden}'
