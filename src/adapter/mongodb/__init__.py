USERS_COLLECTION_NAME = 'users'
