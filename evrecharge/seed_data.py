# evrecharge/seed_data.py
# Initial station catalogue, written once by the admin seed action.

HOURS = ["09:00 AM", "10:00 AM", "11:00 AM", "12:00 PM", "01:00 PM", "02:00 PM", "03:00 PM", "04:00 PM"]


def _slots(*blocked):
    return [{"time": t, "available": t not in blocked} for t in HOURS]


def _bunks(*statuses):
    return [
        {"id": f"bunk-{i}", "name": f"Bunk {i}", "status": status}
        for i, status in enumerate(statuses, start=1)
    ]


STATIONS = [
    {
        "id": "tata-power-cp",
        "name": "Tata Power EZ Charge - Connaught Place",
        "address": "Block A, Connaught Place",
        "city": "New Delhi",
        "country": "India",
        "coordinates": {"lat": 28.6315, "lng": 77.2167},
        "mobile_number": "+91 11 2341 5678",
        "amenities": ["Wi-Fi", "Cafe", "Restroom"],
        "slots": _slots("10:00 AM", "02:00 PM"),
        "rating": 4.5,
        "review_count": 212,
        "image_url": "https://placehold.co/600x400.png",
        "image_hint": "charging station city",
        "bunks": _bunks("available", "occupied", "available"),
    },
    {
        "id": "ather-grid-koramangala",
        "name": "Ather Grid - Koramangala",
        "address": "80 Feet Road, Koramangala 4th Block",
        "city": "Bengaluru",
        "country": "India",
        "coordinates": {"lat": 12.9352, "lng": 77.6245},
        "mobile_number": "+91 80 4123 9876",
        "amenities": ["Wi-Fi", "Lounge"],
        "slots": _slots("09:00 AM", "12:00 PM"),
        "rating": 4.7,
        "review_count": 158,
        "image_url": "https://placehold.co/600x400.png",
        "image_hint": "electric scooter charging",
        "bunks": _bunks("available", "maintenance"),
    },
    {
        "id": "chargegrid-mumbai",
        "name": "ChargeGrid Mumbai",
        "address": "Bandra Kurla Complex",
        "city": "Mumbai",
        "country": "India",
        "coordinates": {"lat": 19.0660, "lng": 72.8677},
        "mobile_number": "+91 22 6612 3344",
        "amenities": ["Restroom", "Vending Machine"],
        "slots": _slots("11:00 AM", "03:00 PM"),
        "rating": 4.2,
        "review_count": 96,
        "image_url": "https://placehold.co/600x400.png",
        "image_hint": "parking garage charger",
        "bunks": _bunks("occupied", "available"),
    },
    {
        "id": "goa-coastal-charge",
        "name": "Goa Coastal Charge",
        "address": "Calangute Beach Road",
        "city": "Goa",
        "country": "India",
        "coordinates": {"lat": 15.5439, "lng": 73.7553},
        "mobile_number": "+91 832 227 1100",
        "amenities": ["Cafe", "Restroom"],
        "slots": _slots("01:00 PM", "04:00 PM"),
        "rating": 4.4,
        "review_count": 61,
        "image_url": "https://placehold.co/600x400.png",
        "image_hint": "beach charging station",
        "bunks": _bunks("available"),
    },
    {
        "id": "chargepoint-canary-wharf",
        "name": "ChargePoint - Canary Wharf",
        "address": "1 Canada Square",
        "city": "London",
        "country": "United Kingdom",
        "coordinates": {"lat": 51.5049, "lng": -0.0195},
        "mobile_number": "+44 20 7946 0321",
        "amenities": ["Wi-Fi", "Cafe", "Lounge"],
        "slots": _slots("09:00 AM", "03:00 PM"),
        "rating": 4.6,
        "review_count": 340,
        "image_url": "https://placehold.co/600x400.png",
        "image_hint": "underground car park",
        "bunks": _bunks("available", "available", "occupied", "maintenance"),
    },
    {
        "id": "ionity-alexanderplatz",
        "name": "Ionity Charging Hub - Alexanderplatz",
        "address": "Alexanderplatz 1",
        "city": "Berlin",
        "country": "Germany",
        "coordinates": {"lat": 52.5219, "lng": 13.4132},
        "mobile_number": "+49 30 1234 5678",
        "amenities": ["Wi-Fi", "Restroom"],
        "slots": _slots("12:00 PM", "02:00 PM"),
        "rating": 4.3,
        "review_count": 187,
        "image_url": "https://placehold.co/600x400.png",
        "image_hint": "fast charger city square",
        "bunks": _bunks("available", "occupied"),
    },
    {
        "id": "paris-volt-tour-eiffel",
        "name": "Paris-Volt - Tour Eiffel",
        "address": "5 Avenue Anatole France",
        "city": "Paris",
        "country": "France",
        "coordinates": {"lat": 48.8584, "lng": 2.2945},
        "mobile_number": "+33 1 4555 6677",
        "amenities": ["Cafe", "Restroom"],
        "slots": _slots("10:00 AM", "11:00 AM"),
        "rating": 4.8,
        "review_count": 402,
        "image_url": "https://placehold.co/600x400.png",
        "image_hint": "charging near landmark",
        "bunks": _bunks("available", "available"),
    },
    {
        "id": "tokyo-ev-fast-charge",
        "name": "Tokyo EV Fast Charge",
        "address": "2-1 Marunouchi, Chiyoda",
        "city": "Tokyo",
        "country": "Japan",
        "coordinates": {"lat": 35.6812, "lng": 139.7671},
        "mobile_number": "+81 3 1234 5678",
        "amenities": ["Wi-Fi", "Vending Machine", "Restroom"],
        "slots": _slots("03:00 PM", "04:00 PM"),
        "rating": 4.9,
        "review_count": 523,
        "image_url": "https://placehold.co/600x400.png",
        "image_hint": "modern charging hub",
        "bunks": _bunks("occupied", "available", "available"),
    },
    {
        "id": "sydney-harbour-efill",
        "name": "Sydney Harbour E-Fill",
        "address": "Circular Quay West",
        "city": "Sydney",
        "country": "Australia",
        "coordinates": {"lat": -33.8587, "lng": 151.2100},
        "mobile_number": "+61 2 9876 5432",
        "amenities": ["Cafe", "Wi-Fi"],
        "slots": _slots("09:00 AM", "01:00 PM"),
        "rating": 4.5,
        "review_count": 143,
        "image_url": "https://placehold.co/600x400.png",
        "image_hint": "harbour charging",
        "bunks": _bunks("available", "maintenance"),
    },
]
