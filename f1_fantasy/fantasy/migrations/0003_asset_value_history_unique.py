from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ('fantasy', '0002_seed_valuation_table'),
    ]

    operations = [
        migrations.AddConstraint(
            model_name='assetvaluehistory',
            constraint=models.UniqueConstraint(
                condition=models.Q(kind='driver'), fields=('driver', 'race'), name='unique_driver_value_per_race'
            ),
        ),
        migrations.AddConstraint(
            model_name='assetvaluehistory',
            constraint=models.UniqueConstraint(
                condition=models.Q(kind='engine'), fields=('engine', 'race'), name='unique_engine_value_per_race'
            ),
        ),
        migrations.AddConstraint(
            model_name='assetvaluehistory',
            constraint=models.UniqueConstraint(
                condition=models.Q(kind='chassis'), fields=('chassis', 'race'), name='unique_chassis_value_per_race'
            ),
        ),
    ]
