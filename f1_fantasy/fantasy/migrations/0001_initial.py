import django.contrib.auth.models
import django.contrib.auth.validators
import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('auth', '0012_alter_user_first_name_max_length'),
    ]

    operations = [
        migrations.CreateModel(
            name='User',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('password', models.CharField(max_length=128, verbose_name='password')),
                ('last_login', models.DateTimeField(blank=True, null=True, verbose_name='last login')),
                ('is_superuser', models.BooleanField(default=False, help_text='Designates that this user has all permissions without explicitly assigning them.', verbose_name='superuser status')),
                ('username', models.CharField(error_messages={'unique': 'A user with that username already exists.'}, help_text='Required. 150 characters or fewer. Letters, digits and @/./+/-/_ only.', max_length=150, unique=True, validators=[django.contrib.auth.validators.UnicodeUsernameValidator()], verbose_name='username')),
                ('first_name', models.CharField(blank=True, max_length=150, verbose_name='first name')),
                ('last_name', models.CharField(blank=True, max_length=150, verbose_name='last name')),
                ('email', models.EmailField(blank=True, max_length=254, verbose_name='email address')),
                ('is_staff', models.BooleanField(default=False, help_text='Designates whether the user can log into this admin site.', verbose_name='staff status')),
                ('is_active', models.BooleanField(default=True, help_text='Designates whether this user should be treated as active. Unselect this instead of deleting accounts.', verbose_name='active')),
                ('date_joined', models.DateTimeField(default=django.utils.timezone.now, verbose_name='date joined')),
                ('groups', models.ManyToManyField(blank=True, help_text='The groups this user belongs to. A user will get all permissions granted to each of their groups.', related_name='user_set', related_query_name='user', to='auth.group', verbose_name='groups')),
                ('user_permissions', models.ManyToManyField(blank=True, help_text='Specific permissions for this user.', related_name='user_set', related_query_name='user', to='auth.permission', verbose_name='user permissions')),
            ],
            options={
                'verbose_name': 'User',
                'verbose_name_plural': 'Users',
                'db_table': 'auth_user',
            },
            managers=[
                ('objects', django.contrib.auth.models.UserManager()),
            ],
        ),
        migrations.CreateModel(
            name='Season',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('year', models.IntegerField(unique=True)),
                ('name', models.CharField(help_text="e.g., '2025 Formula 1 Season'", max_length=100)),
                ('is_active', models.BooleanField(default=True)),
            ],
            options={
                'ordering': ['-year'],
            },
        ),
        migrations.CreateModel(
            name='Engine',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=100, unique=True)),
                ('value', models.IntegerField(help_text='Current market value in credits')),
            ],
            options={
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='Chassis',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=100, unique=True)),
                ('value', models.IntegerField(help_text='Current market value in credits')),
                ('engine', models.ForeignKey(blank=True, help_text='Engine currently fitted to this chassis', null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='chassis', to='fantasy.engine')),
            ],
            options={
                'verbose_name_plural': 'Chassis',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='Driver',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=200)),
                ('number', models.IntegerField(help_text='Car number', unique=True)),
                ('value', models.IntegerField(help_text='Current market value in credits')),
                ('retired', models.BooleanField(default=False, help_text='Retired drivers keep their history but cannot be newly selected')),
                ('chassis', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='drivers', to='fantasy.chassis')),
            ],
            options={
                'ordering': ['number'],
            },
        ),
        migrations.CreateModel(
            name='Race',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(help_text="e.g., 'Monaco Grand Prix'", max_length=255)),
                ('location', models.CharField(blank=True, max_length=100)),
                ('country', models.CharField(blank=True, max_length=100)),
                ('round_number', models.IntegerField(help_text='Race number in season (1 for first race, 2 for second, etc.)', validators=[django.core.validators.MinValueValidator(1)])),
                ('race_date', models.DateField(help_text='Main race date, defines chronological order')),
                ('results_submitted', models.BooleanField(default=False, help_text='Set once the valuation pass for this race has completed')),
                ('season', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='races', to='fantasy.season')),
            ],
            options={
                'ordering': ['race_date', 'round_number'],
                'indexes': [models.Index(fields=['race_date'], name='fantasy_race_date_idx')],
                'unique_together': {('season', 'round_number')},
            },
        ),
        migrations.CreateModel(
            name='RaceResult',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('position', models.IntegerField(validators=[django.core.validators.MinValueValidator(1)])),
                ('valuation', models.DecimalField(blank=True, decimal_places=2, help_text='Percentage value change applied for this race', max_digits=7, null=True)),
                ('driver', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='race_results', to='fantasy.driver')),
                ('race', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='results', to='fantasy.race')),
            ],
            options={
                'ordering': ['race', 'position'],
                'constraints': [
                    models.UniqueConstraint(fields=('race', 'driver'), name='unique_driver_per_race'),
                    models.UniqueConstraint(fields=('race', 'position'), name='unique_position_per_race'),
                ],
            },
        ),
        migrations.CreateModel(
            name='ValuationTableEntry',
            fields=[
                ('difference', models.IntegerField(help_text='Baseline position minus finishing position (positive = better than expected)', primary_key=True, serialize=False, validators=[django.core.validators.MinValueValidator(-20), django.core.validators.MaxValueValidator(20)])),
                ('description', models.CharField(max_length=255)),
                ('percentage_change', models.DecimalField(decimal_places=2, default=0, help_text='Signed percentage applied to the asset value', max_digits=7)),
            ],
            options={
                'verbose_name': 'Valuation Table Entry',
                'verbose_name_plural': 'Valuation Table',
                'ordering': ['difference'],
            },
        ),
        migrations.CreateModel(
            name='PerformanceHistory',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('kind', models.CharField(choices=[('driver', 'Driver'), ('engine', 'Engine'), ('chassis', 'Chassis')], db_index=True, max_length=10)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('position', models.IntegerField(help_text='Finishing position, 0 when not applicable')),
                ('chassis', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name='+', to='fantasy.chassis')),
                ('driver', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name='+', to='fantasy.driver')),
                ('engine', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name='+', to='fantasy.engine')),
                ('race', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='+', to='fantasy.race')),
            ],
            options={
                'verbose_name': 'Performance History',
                'verbose_name_plural': 'Performance History',
                'ordering': ['race__race_date', 'kind'],
                'indexes': [models.Index(fields=['kind', 'race'], name='fantasy_perf_kind_race_idx')],
            },
        ),
        migrations.CreateModel(
            name='AssetValueHistory',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('kind', models.CharField(choices=[('driver', 'Driver'), ('engine', 'Engine'), ('chassis', 'Chassis')], db_index=True, max_length=10)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('previous_value', models.IntegerField(help_text='Value before this race was valued')),
                ('value', models.IntegerField(help_text='Value after this race was valued')),
                ('chassis', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name='+', to='fantasy.chassis')),
                ('driver', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name='+', to='fantasy.driver')),
                ('engine', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name='+', to='fantasy.engine')),
                ('race', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='+', to='fantasy.race')),
            ],
            options={
                'verbose_name': 'Asset Value History',
                'verbose_name_plural': 'Asset Value History',
                'ordering': ['race__race_date', 'kind'],
                'indexes': [models.Index(fields=['kind', 'race'], name='fantasy_value_kind_race_idx')],
            },
        ),
        migrations.CreateModel(
            name='UserTeam',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(choices=[('Premium', 'Premium'), ('Challenger', 'Challenger')], max_length=20)),
                ('initial_credits', models.IntegerField()),
                ('current_credits', models.IntegerField()),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('chassis', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to='fantasy.chassis')),
                ('driver1', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to='fantasy.driver')),
                ('driver2', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to='fantasy.driver')),
                ('engine', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to='fantasy.engine')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='fantasy_teams', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'User Team',
                'verbose_name_plural': 'User Teams',
                'ordering': ['user', '-initial_credits'],
                'unique_together': {('user', 'name')},
            },
        ),
        migrations.CreateModel(
            name='RosterCreditHistory',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('credits_gained', models.IntegerField()),
                ('credits_after', models.IntegerField()),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('race', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='+', to='fantasy.race')),
                ('user_team', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='credit_history', to='fantasy.userteam')),
            ],
            options={
                'verbose_name': 'Roster Credit History',
                'verbose_name_plural': 'Roster Credit History',
                'ordering': ['race__race_date', 'user_team'],
                'unique_together': {('user_team', 'race')},
            },
        ),
        migrations.CreateModel(
            name='BettingStatus',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('is_open', models.BooleanField(default=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Betting Status',
                'verbose_name_plural': 'Betting Status',
            },
        ),
    ]
