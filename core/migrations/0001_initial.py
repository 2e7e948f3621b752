import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('tenants', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='CompteurDocument',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('type_document', models.CharField(choices=[('VENTE', 'Vente'), ('COMMANDE', 'Commande fournisseur')], max_length=20)),
                ('dernier_numero', models.PositiveIntegerField(default=0)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('boutique', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='compteurs', to='tenants.boutique')),
            ],
        ),
        migrations.AddConstraint(
            model_name='compteurdocument',
            constraint=models.UniqueConstraint(fields=('boutique', 'type_document'), name='unique_compteur_par_boutique_et_type'),
        ),
    ]
