from .kernel import CalystoXY

if __name__ == '__main__':
    CalystoXY.run_as_main()
