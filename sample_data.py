"""Starter trails inserted into an empty database (Zion National Park)."""

SAMPLE_TRAILS = [
    {
        'name':         'Angels Landing',
        'description':  'One of the most famous and thrilling hikes in Zion National Park',
        'difficulty':   'Strenuous',
        'distance':     '5.4 miles',
        'elevation':    '1,488 feet',
        'duration':     '4-6 hours',
        'location':     'Zion National Park, Utah',
        'coordinates':  '37.2690,-112.9469',
        'image_url':    'https://example.com/angels-landing.jpg',
        'best_season':  'Spring and Fall',
        'parking_info': 'Parking available at the Grotto Trailhead',
    },
    {
        'name':         'The Narrows',
        'description':  'Iconic water hike through the narrowest section of Zion Canyon',
        'difficulty':   'Moderate to Strenuous',
        'distance':     'Up to 16 miles',
        'elevation':    '334 feet',
        'duration':     '4-8 hours',
        'location':     'Zion National Park, Utah',
        'coordinates':  '37.3045,-112.9477',
        'image_url':    'https://example.com/the-narrows.jpg',
        'best_season':  'Late Spring to Fall',
        'parking_info': 'Temple of Sinawava shuttle stop',
    },
    {
        'name':         'Emerald Pools Trail',
        'description':  'Series of three pools with waterfalls and hanging gardens',
        'difficulty':   'Easy to Moderate',
        'distance':     '3 miles',
        'elevation':    '350 feet',
        'duration':     '2-4 hours',
        'location':     'Zion National Park, Utah',
        'coordinates':  '37.2516,-112.9507',
        'image_url':    'https://example.com/emerald-pools.jpg',
        'best_season':  'Year-round',
        'parking_info': 'Zion Lodge parking area',
    },
    {
        'name':         'Observation Point',
        'description':  'Highest point in Zion with panoramic views',
        'difficulty':   'Strenuous',
        'distance':     '8 miles',
        'elevation':    '2,148 feet',
        'duration':     '6-8 hours',
        'location':     'Zion National Park, Utah',
        'coordinates':  '37.2709,-112.9431',
        'image_url':    'https://example.com/observation-point.jpg',
        'best_season':  'Spring and Fall',
        'parking_info': 'Weeping Rock parking area',
    },
    {
        'name':         'Watchman Trail',
        'description':  'Less crowded trail with views of Springdale and the Towers of the Virgin',
        'difficulty':   'Moderate',
        'distance':     '3.3 miles',
        'elevation':    '368 feet',
        'duration':     '2-3 hours',
        'location':     'Zion National Park, Utah',
        'coordinates':  '37.2001,-112.9847',
        'image_url':    'https://example.com/watchman-trail.jpg',
        'best_season':  'Year-round',
        'parking_info': 'Visitor Center parking lot',
    },
]
