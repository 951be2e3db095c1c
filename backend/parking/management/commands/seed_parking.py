"""
Load a starter set of European truck parks.

Parks that already exist (same name and country) are skipped, so the
command can be re-run safely.
"""

import logging
from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import IntegrityError, transaction

from parking.models import TruckPark

logger = logging.getLogger(__name__)

FULL_SERVICE = {
    'has_security': True, 'has_camera': True, 'has_fence': True,
    'has_toilets': True, 'has_showers': True, 'has_restaurant': True,
    'has_shop': True, 'has_adblue': True, 'has_wifi': True,
}

SEED_PARKS = [
    {'name': 'Rasthof Helmstedt Nord', 'address': 'A2 km 242, 38350 Helmstedt', 'country': 'DE',
     'latitude': '52.2167', 'longitude': '11.0167', 'total_spaces': 150, 'price_per_night_eur': '15', **FULL_SERVICE},
    {'name': 'Autohof Peine', 'address': 'Im Gewerbepark 15, 31228 Peine', 'country': 'DE',
     'latitude': '52.3167', 'longitude': '10.2333', 'total_spaces': 200, 'price_per_night_eur': '20',
     'has_electricity': True, 'has_water': True, **FULL_SERVICE},
    {'name': 'Rasthof Münsterland West', 'address': 'A1 km 268, 48268 Greven', 'country': 'DE',
     'latitude': '52.0833', 'longitude': '7.6500', 'total_spaces': 120, 'has_camera': True,
     'has_toilets': True, 'has_restaurant': True, 'has_shop': True, 'has_adblue': True, 'is_free': True},
    {'name': 'MOP Konin', 'address': 'A2 km 289, 62-510 Konin', 'country': 'PL',
     'latitude': '52.2167', 'longitude': '18.2500', 'total_spaces': 180, 'price_per_night_eur': '10', **FULL_SERVICE},
    {'name': 'Truck Stop Koło', 'address': 'ul. Toruńska 200, 62-600 Koło', 'country': 'PL',
     'latitude': '52.2000', 'longitude': '18.6333', 'total_spaces': 100, 'price_per_night_eur': '8',
     'has_electricity': True, 'has_water': True, **FULL_SERVICE},
    {'name': 'Truckparking Veenendaal', 'address': 'De Smalle Zijde 40, 3903 LP Veenendaal', 'country': 'NL',
     'latitude': '52.0167', 'longitude': '5.5333', 'total_spaces': 250, 'price_per_night_eur': '25',
     'has_security': True, 'has_camera': True, 'has_fence': True, 'has_electricity': True,
     'has_water': True, 'has_toilets': True, 'has_showers': True, 'has_wifi': True},
    {'name': 'De Bolder Truck Parking', 'address': 'Energieweg 2, 3542 DZ Utrecht', 'country': 'NL',
     'latitude': '52.1000', 'longitude': '5.0333', 'total_spaces': 180, 'price_per_night_eur': '28',
     'has_electricity': True, 'has_water': True, **FULL_SERVICE},
    {'name': 'Total Aire de Heverlee', 'address': 'E40 km 23, 3001 Heverlee', 'country': 'BE',
     'latitude': '50.8667', 'longitude': '4.6833', 'total_spaces': 80, 'has_camera': True,
     'has_toilets': True, 'has_restaurant': True, 'has_shop': True, 'has_adblue': True, 'is_free': True},
    {'name': 'Aire de Ressons-Ouest', 'address': 'A1 km 90, 60490 Ressons-sur-Matz', 'country': 'FR',
     'latitude': '49.5500', 'longitude': '2.7500', 'total_spaces': 200, 'price_per_night_eur': '18', **FULL_SERVICE},
    {'name': 'Área de Servicio La Junquera', 'address': 'AP-7 km 2, 17700 La Jonquera', 'country': 'ES',
     'latitude': '42.4167', 'longitude': '2.8667', 'total_spaces': 300, 'price_per_night_eur': '22',
     'has_electricity': True, 'has_water': True, **FULL_SERVICE},
    {'name': 'Área de Servicio Lleida', 'address': 'A-2 km 457, 25190 Lleida', 'country': 'ES',
     'latitude': '41.6167', 'longitude': '0.6333', 'total_spaces': 150, 'price_per_night_eur': '15', **FULL_SERVICE},
    {'name': 'Area di Servizio Secchia Ovest', 'address': 'A1 km 162, 41058 Vignola', 'country': 'IT',
     'latitude': '44.4500', 'longitude': '11.0000', 'total_spaces': 180, 'price_per_night_eur': '20', **FULL_SERVICE},
    {'name': 'Truckparkplatz Innsbruck', 'address': 'Grabenweg 68, 6020 Innsbruck', 'country': 'AT',
     'latitude': '47.2500', 'longitude': '11.3833', 'total_spaces': 120, 'price_per_night_eur': '30',
     'has_security': True, 'has_camera': True, 'has_fence': True, 'has_electricity': True,
     'has_water': True, 'has_toilets': True, 'has_showers': True, 'has_wifi': True},
    {'name': 'OMV Velká Bíteš', 'address': 'D1 km 153, 595 01 Velká Bíteš', 'country': 'CZ',
     'latitude': '49.2833', 'longitude': '16.2167', 'total_spaces': 100, 'has_camera': True,
     'has_toilets': True, 'has_showers': True, 'has_restaurant': True, 'has_shop': True,
     'has_adblue': True, 'is_free': True},
    {'name': 'MOL Töltőállomás Győr', 'address': 'M1 km 108, 9024 Győr', 'country': 'HU',
     'latitude': '47.6833', 'longitude': '17.6333', 'total_spaces': 130, 'price_per_night_eur': '12', **FULL_SERVICE},
    {'name': 'Petrom Peco Pitești', 'address': 'A1 km 109, 110224 Pitești', 'country': 'RO',
     'latitude': '44.8500', 'longitude': '24.8667', 'total_spaces': 80, 'price_per_night_eur': '8', **FULL_SERVICE},
    {'name': 'Circle K Truck Stop Kaunas', 'address': 'A1 km 102, 54340 Kaunas', 'country': 'LT',
     'latitude': '54.9000', 'longitude': '23.9000', 'total_spaces': 100, 'price_per_night_eur': '10', **FULL_SERVICE},
    {'name': 'Truckhaven Lymm Services', 'address': 'M6 J20, Lymm WA13 0SP', 'country': 'GB',
     'latitude': '53.3833', 'longitude': '-2.4667', 'total_spaces': 120, 'price_per_night_eur': '30',
     'has_electricity': True, 'has_water': True, **FULL_SERVICE},
    {'name': 'Donington Park Services', 'address': 'A50/M1, Castle Donington DE74 2TN', 'country': 'GB',
     'latitude': '52.8333', 'longitude': '-1.3667', 'total_spaces': 200, 'price_per_night_eur': '28',
     'has_electricity': True, 'has_water': True, **FULL_SERVICE},
]


class Command(BaseCommand):
    help = "Load the starter set of European truck parks"

    def handle(self, *args, **options):
        inserted = 0
        skipped = 0

        for park in SEED_PARKS:
            if TruckPark.objects.filter(name=park['name'], country=park['country']).exists():
                skipped += 1
                continue

            data = dict(park)
            data['latitude'] = Decimal(data['latitude'])
            data['longitude'] = Decimal(data['longitude'])
            if 'price_per_night_eur' in data:
                data['price_per_night_eur'] = Decimal(data['price_per_night_eur'])

            try:
                with transaction.atomic():
                    TruckPark.objects.create(**data)
                inserted += 1
            except IntegrityError:
                # Created concurrently by another run
                skipped += 1

        logger.info(f"Truck park seed finished: {inserted} inserted, {skipped} skipped")
        self.stdout.write(self.style.SUCCESS(
            f"Inserted {inserted} truck parks, skipped {skipped} (total {len(SEED_PARKS)})"
        ))
