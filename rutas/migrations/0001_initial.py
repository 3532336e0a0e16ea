from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Escuela',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('nombre', models.CharField(max_length=255)),
                ('latitud', models.DecimalField(decimal_places=6, max_digits=9)),
                ('longitud', models.DecimalField(decimal_places=6, max_digits=9)),
                ('es_infantil', models.BooleanField(default=None, null=True, help_text='Escuela de educación infantil (tope de viaje reducido).')),
            ],
        ),
        migrations.CreateModel(
            name='Punto',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('nombre', models.CharField(blank=True, max_length=255)),
                ('latitud', models.DecimalField(decimal_places=6, max_digits=9)),
                ('longitud', models.DecimalField(decimal_places=6, max_digits=9)),
                ('estado', models.CharField(choices=[('activo', 'Activo'), ('inactivo', 'Inactivo')], default='activo', max_length=10)),
            ],
        ),
        migrations.CreateModel(
            name='Estudiante',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('nombre', models.CharField(max_length=255)),
                ('deficiencia', models.CharField(blank=True, max_length=255, null=True)),
                ('punto', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='estudiantes', to='rutas.punto')),
            ],
        ),
        migrations.CreateModel(
            name='Zona',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('nombre', models.CharField(max_length=255)),
                ('escuelas', models.ManyToManyField(blank=True, related_name='zonas', to='rutas.escuela')),
                ('puntos', models.ManyToManyField(blank=True, related_name='zonas', to='rutas.punto')),
            ],
        ),
        migrations.CreateModel(
            name='RutaInteligente',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('identificador', models.CharField(max_length=50)),
                ('tipo', models.CharField(choices=[('normal', 'Normal'), ('infantil', 'Infantil'), ('especial', 'Especial')], max_length=10)),
                ('turno', models.CharField(blank=True, max_length=20)),
                ('vehiculo', models.CharField(choices=[('van', 'Van'), ('microonibus', 'Microônibus'), ('onibus', 'Ônibus')], max_length=15)),
                ('capacidad', models.PositiveIntegerField()),
                ('orden_puntos', models.JSONField(default=list)),
                ('duracion_min', models.FloatField()),
                ('distancia_km', models.FloatField()),
                ('creado_en', models.DateTimeField(auto_now_add=True)),
                ('escuelas', models.ManyToManyField(blank=True, related_name='rutas_inteligentes', to='rutas.escuela')),
                ('estudiantes', models.ManyToManyField(blank=True, related_name='rutas_inteligentes', to='rutas.estudiante')),
                ('zona', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='rutas', to='rutas.zona')),
            ],
            options={
                'ordering': ['-creado_en', '-id'],
            },
        ),
        migrations.CreateModel(
            name='ParadaRuta',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('orden', models.PositiveIntegerField()),
                ('punto', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='paradas', to='rutas.punto')),
                ('ruta', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='paradas', to='rutas.rutainteligente')),
            ],
            options={
                'ordering': ['ruta', 'orden'],
            },
        ),
        migrations.AddConstraint(
            model_name='paradaruta',
            constraint=models.UniqueConstraint(fields=('ruta', 'punto'), name='parada_unica_por_ruta'),
        ),
        migrations.AddConstraint(
            model_name='paradaruta',
            constraint=models.UniqueConstraint(fields=('ruta', 'orden'), name='orden_unico_por_ruta'),
        ),
    ]
