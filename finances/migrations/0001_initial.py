import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('tenants', '0001_initial'),
        ('commerce', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Transaction',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('type', models.CharField(choices=[('VENTE', 'Vente'), ('ACHAT', 'Achat'), ('DEPENSE', 'Dépense'), ('INJECTION_CAPITAL', 'Injection de capital'), ('RETRAIT', 'Retrait'), ('RECETTE', 'Recette')], max_length=20)),
                ('montant', models.DecimalField(decimal_places=2, max_digits=14)),
                ('description', models.CharField(max_length=255)),
                ('categorie_depense', models.CharField(blank=True, choices=[('MARCHANDISES', 'Marchandises'), ('EXPLOITATION', 'Exploitation'), ('MARKETING', 'Marketing'), ('TRANSPORT', 'Transport'), ('ADMINISTRATION', 'Administration'), ('AUTRE', 'Autre')], max_length=20)),
                ('date_transaction', models.DateTimeField(default=django.utils.timezone.now)),
                ('mois', models.CharField(editable=False, max_length=7)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('boutique', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='transactions', to='tenants.boutique')),
                ('utilisateur', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='transactions', to=settings.AUTH_USER_MODEL)),
                ('vente', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='transactions', to='commerce.vente')),
                ('paiement', models.OneToOneField(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='transaction', to='commerce.paiement')),
                ('commande', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='transactions', to='commerce.commande')),
            ],
            options={
                'ordering': ['-date_transaction', '-id'],
            },
        ),
        migrations.AddConstraint(
            model_name='transaction',
            constraint=models.CheckConstraint(condition=models.Q(models.Q(('type', 'DEPENSE'), ('montant__lt', 0)), models.Q(models.Q(('type', 'DEPENSE'), _negated=True), ('montant__gt', 0)), _connector='OR'), name='transaction_signe_selon_type'),
        ),
    ]
